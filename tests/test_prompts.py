"""Tests for prompt profiles."""

import pytest
from pydantic import ValidationError

from learning_assistant.prompts.loader import PromptProfileRegistry, load_registry
from learning_assistant.prompts.models import PromptProfile

VALID_PROMPTS = {
    "summary": "Summarize: {content}",
    "key_points": "Key points of {content}",
    "qa": "Questions about {content}",
    "code_explanation": "Explain code in {content}",
}


def test_packaged_profiles_are_loaded(settings):
    registry = load_registry(settings.prompt_profiles_dir)
    assert sorted(registry.get_available_ids()) == ["text", "video"]
    assert registry.get("text").input_type == "text"
    assert registry.get("video").input_type == "url"


def test_render_substitutes_content_and_length(settings):
    profile = load_registry(settings.prompt_profiles_dir).get("text")
    prompt = profile.render("summary", content="{not a placeholder}", length="long")
    assert "a long summary" in prompt
    assert prompt.endswith("{not a placeholder}")


def test_template_without_content_is_rejected():
    prompts = dict(VALID_PROMPTS, qa="Ask five questions")
    with pytest.raises(ValidationError):
        PromptProfile.model_validate(
            {"id": "bad", "title": "Bad", "input_type": "text", "prompts": prompts}
        )


def test_template_with_unknown_placeholder_is_rejected():
    prompts = dict(VALID_PROMPTS, summary="Summarize {content} for {audience}")
    with pytest.raises(ValidationError):
        PromptProfile.model_validate(
            {"id": "bad", "title": "Bad", "input_type": "text", "prompts": prompts}
        )


def test_missing_directory_leaves_registry_empty(tmp_path):
    registry = PromptProfileRegistry()
    registry.load_from_directory(tmp_path / "missing")
    assert registry.get_available_ids() == []


def test_invalid_yaml_profile_raises(tmp_path):
    (tmp_path / "broken.yaml").write_text("id: broken\ntitle: Broken\ninput_type: text\n")
    with pytest.raises(ValidationError):
        load_registry(tmp_path)
