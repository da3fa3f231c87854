"""Tests for template rendering"""

from src.prompts.renderer import extract_placeholders, missing_parameters, render


def test_multiple_placeholders():
    """Test that every placeholder is substituted"""
    rendered = render(
        "Hello {{name}}, you are {{age}} years old!",
        {"name": "Juan", "age": "30"},
    )
    assert rendered == "Hello Juan, you are 30 years old!"


def test_empty_parameters_is_identity():
    """Test rendering with no parameters returns the template"""
    template = "No parameters here {{maybe}}"
    assert render(template, {}) == template


def test_repeated_placeholder():
    """Test that every occurrence of a key is replaced"""
    assert render("{{x}} and {{x}}", {"x": "y"}) == "y and y"


def test_unresolved_placeholders_are_kept():
    """Test that missing keys are not errors"""
    rendered = render("{{used}} {{missing}}", {"used": "yes", "unused": "no"})
    assert rendered == "yes {{missing}}"


def test_no_recursive_substitution():
    """Test values containing placeholders are not expanded again"""
    rendered = render("{{a}} {{b}}", {"a": "{{b}}", "b": "B"})
    assert rendered == "{{b}} B"


def test_prefix_keys_do_not_interfere():
    """Test keys that are prefixes of each other"""
    rendered = render("{{a}}-{{ab}}", {"a": "1", "ab": "2"})
    assert rendered == "1-2"


def test_overlapping_keys_prefer_longest():
    """Test overlapping placeholder text resolves deterministically"""
    parameters = {"a}}{{b": "LONG", "a": "A", "b": "B"}
    reordered = {"b": "B", "a": "A", "a}}{{b": "LONG"}

    assert render("{{a}}{{b}}", parameters) == "LONG"
    assert render("{{a}}{{b}}", reordered) == "LONG"


def test_special_characters_in_values():
    """Test values are inserted literally"""
    rendered = render("Path: {{p}}", {"p": r"C:\temp\$1 {0}"})
    assert rendered == r"Path: C:\temp\$1 {0}"


def test_rendering_is_idempotent_on_rendered_text():
    """Test re-rendering text without placeholders is a no-op"""
    parameters = {"greeting": "Hello", "name": "World"}
    once = render("{{greeting}} {{name}}!", parameters)
    assert once == "Hello World!"
    assert render(once, parameters) == once


def test_extract_placeholders():
    """Test placeholder extraction keeps first-occurrence order"""
    names = extract_placeholders("{{b}} {{a}} {{b}} {{first name}}")
    assert names == ["b", "a", "first name"]


def test_missing_parameters():
    """Test reporting of unresolved placeholders"""
    assert missing_parameters("{{a}} {{b}}", {"a": "1"}) == ["b"]
    assert missing_parameters("plain", {}) == []
