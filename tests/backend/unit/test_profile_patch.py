"""
Unit tests for the sparse profile patch built from a request body.
"""
from types import SimpleNamespace

import pytest

from app.schemas.profile import ProfileIn
from app.services.profiles import ProfilePatch, split_skills


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("python, sql ,go", ["python", "sql", "go"]),
        ("python", ["python"]),
        ("python,, ,sql", ["python", "sql"]),
        (["  rust ", "c"], ["rust", "c"]),
        ("", []),
        (None, []),
    ],
)
def test_split_skills(raw, expected):
    assert split_skills(raw) == expected


def test_patch_only_contains_supplied_fields():
    patch = ProfilePatch.from_input(ProfileIn(status="Developer", skills="python, sql", company="  "))
    assert patch.fields() == {"status": "Developer", "skills": ["python", "sql"]}
    assert patch.social == {}


def test_patch_collects_social_links():
    patch = ProfilePatch.from_input(
        ProfileIn(status="Dev", skills="go", twitter="https://twitter.com/dev", youtube="")
    )
    assert patch.social == {"twitter": "https://twitter.com/dev"}
    assert patch.create_kwargs()["social"] == {"twitter": "https://twitter.com/dev"}


def test_apply_leaves_omitted_fields_untouched():
    profile = SimpleNamespace(
        status="Junior",
        skills=["python"],
        company="Acme",
        bio="Hello",
        social={"github": "x", "twitter": "old"},
    )
    patch = ProfilePatch.from_input(ProfileIn(status="Senior", twitter="new", linkedin="li"))
    patch.apply(profile)

    assert profile.status == "Senior"
    assert profile.company == "Acme"
    assert profile.bio == "Hello"
    assert profile.skills == ["python"]
    assert profile.social == {"github": "x", "twitter": "new", "linkedin": "li"}


def test_empty_skills_do_not_clear_existing_ones():
    profile = SimpleNamespace(status="Dev", skills=["python"], social={})
    ProfilePatch.from_input(ProfileIn(skills=" , ")).apply(profile)
    assert profile.skills == ["python"]
