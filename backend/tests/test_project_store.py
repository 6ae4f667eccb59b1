from concurrent.futures import ThreadPoolExecutor

import pytest
from chatbot.core.errors import Forbidden, InvalidInput, NotFound


def test_create_trims_name_and_starts_empty(projects):
    project = projects.create(1, "  P1  ")
    assert project.id == 1
    assert project.owner_id == 1
    assert project.name == "P1"
    assert project.prompts == []


@pytest.mark.parametrize("name", ["", "   ", None])
def test_create_rejects_blank_name(projects, name):
    with pytest.raises(InvalidInput):
        projects.create(1, name)


def test_list_by_owner_only_returns_own_projects(projects):
    projects.create(1, "mine")
    projects.create(2, "theirs")
    projects.create(1, "also mine")
    assert sorted(p.name for p in projects.list_by_owner(1)) == ["also mine", "mine"]
    assert projects.list_by_owner(3) == []


def test_get_unknown_project(projects):
    assert projects.get(42) is None


def test_add_prompt_appends_in_order(projects):
    project = projects.create(1, "P1")
    assert projects.add_prompt(project.id, 1, "  first ") == ["first"]
    assert projects.add_prompt(project.id, 1, "second") == ["first", "second"]
    assert projects.get(project.id).prompts == ["first", "second"]


def test_add_prompt_unknown_project(projects):
    with pytest.raises(NotFound):
        projects.add_prompt(99, 1, "hello")


def test_add_prompt_by_non_owner_is_forbidden_and_does_not_mutate(projects):
    project = projects.create(1, "P1")
    projects.add_prompt(project.id, 1, "keep me")
    with pytest.raises(Forbidden):
        projects.add_prompt(project.id, 2, "intruder")
    assert projects.get(project.id).prompts == ["keep me"]


def test_ownership_checked_before_prompt_content(projects):
    project = projects.create(1, "P1")
    with pytest.raises(Forbidden):
        projects.add_prompt(project.id, 2, "   ")


@pytest.mark.parametrize("prompt", ["", "  \n ", None])
def test_add_blank_prompt_rejected(projects, prompt):
    project = projects.create(1, "P1")
    with pytest.raises(InvalidInput):
        projects.add_prompt(project.id, 1, prompt)
    assert projects.get(project.id).prompts == []


def test_returned_projects_are_copies(projects):
    project = projects.create(1, "P1")
    project.prompts.append("sneaky")
    projects.get(project.id).prompts.append("sneaky")
    returned = projects.add_prompt(project.id, 1, "real")
    returned.append("sneaky")
    assert projects.get(project.id).prompts == ["real"]


def test_concurrent_create_never_duplicates_ids(projects):
    with ThreadPoolExecutor(max_workers=8) as pool:
        created = list(pool.map(lambda i: projects.create(1, f"p{i}"), range(50)))
    assert sorted(p.id for p in created) == list(range(1, 51))


def test_concurrent_prompt_appends_are_all_kept(projects):
    project = projects.create(1, "P1")
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda i: projects.add_prompt(project.id, 1, f"prompt {i}"), range(40)))
    assert len(projects.get(project.id).prompts) == 40
