"""Tests for skill candidate validation."""

import pytest
from resume_inference.core.skill_validator import SkillTiers, has_tech_term, is_valid_skill


@pytest.mark.parametrize("candidate", [
    "React",
    "Node.js",
    "C++",
    "CI/CD",
    "Amazon Web Services",
    "Spring Boot",
    "Team Leadership",
    "ES2020",
    "Google Cloud Platform",
])
def test_accepts_skills(candidate):
    assert is_valid_skill(candidate)


@pytest.mark.parametrize("candidate", [
    "and",
    "etc",
    "x",
    "and delivering measurable value to stakeholders",
    "with a focus on reliability",
    "Developed REST APIs",
    "Stanford University",
    "Acme Inc",
    "Shipped on time.",
    "jane@example.com",
    "https://jane.dev",
    "+1 (415) 555-0100",
    "Strong communication and presentation abilities",
    "a" * 51,
])
def test_rejects_noise(candidate):
    assert not is_valid_skill(candidate)


def test_long_candidate_needs_known_technology():
    assert is_valid_skill("Building data pipelines in Python")
    assert not is_valid_skill("Building data pipelines for finance")


def test_ambiguous_words_only_count_as_whole_candidate():
    assert has_tech_term("Go")
    assert not has_tech_term("go to market planning")


def test_tiers_are_configurable():
    strict = SkillTiers(lenient_max_words=1, short_token_max_length=10)
    assert is_valid_skill("Team Leadership")
    assert not is_valid_skill("Team Leadership", strict)
