import pytest

from conftest import FakeProvider
from learning_assistant.prompts.loader import load_registry
from learning_assistant.summarizer.completion import (
    CompletionService,
    requested_sections,
)
from learning_assistant.summarizer.errors import (
    FetchError,
    InvalidInputError,
    ProviderUnavailableError,
)
from learning_assistant.summarizer.models import SummaryOptions


@pytest.fixture
def profiles(settings):
    return load_registry(settings.prompt_profiles_dir)


def test_summary_is_always_requested_first():
    assert requested_sections(SummaryOptions()) == [("summary", "Summary")]
    everything = SummaryOptions(key_points=True, qa=True, code_explanation=True)
    assert [title for _, title in requested_sections(everything)] == [
        "Summary",
        "Key Points",
        "Questions and Answers",
        "Code Explanation",
    ]


@pytest.mark.anyio
@pytest.mark.parametrize("raw_input", ["", "   ", "\n\t "])
async def test_whitespace_input_rejected_before_any_call(raw_input, profiles):
    provider = FakeProvider()
    service = CompletionService(provider)
    with pytest.raises(InvalidInputError) as excinfo:
        await service.run(raw_input, SummaryOptions(), profiles.get("text"))
    assert excinfo.value.message == "please provide input"
    assert provider.prompts == []


@pytest.mark.anyio
async def test_sections_concatenated_in_fixed_order(profiles):
    provider = FakeProvider(["the gist", "* a* b", "Question: Q?Answer: A."])
    service = CompletionService(provider)
    options = SummaryOptions(key_points=True, qa=True)

    result = await service.run("lecture notes", options, profiles.get("video"))

    assert result == (
        "## Summary\nthe gist\n\n"
        "## Key Points\n* a* b\n\n"
        "## Questions and Answers\nQuestion: Q?Answer: A.\n\n"
    )
    assert len(provider.prompts) == 3
    assert provider.prompts[0].startswith("You are a YouTube video summarizer")
    assert all(prompt.endswith("lecture notes") for prompt in provider.prompts)


@pytest.mark.anyio
async def test_text_profile_uses_requested_length(profiles):
    provider = FakeProvider(["short one"])
    service = CompletionService(provider)
    await service.run("some text", SummaryOptions(), profiles.get("text"), length="short")
    assert provider.prompts[0].startswith("Please provide a short summary")


@pytest.mark.anyio
async def test_failure_mid_sequence_discards_partial_results(profiles):
    provider = FakeProvider(["summary ok"], fail_on=1)
    service = CompletionService(provider)
    options = SummaryOptions(key_points=True, qa=True, code_explanation=True)

    with pytest.raises(FetchError) as excinfo:
        await service.run("text", options, profiles.get("text"))

    assert "key points" in excinfo.value.message
    # The sequence stops at the failing call.
    assert len(provider.prompts) == 2


@pytest.mark.anyio
async def test_missing_provider_is_reported(profiles):
    service = CompletionService(None)
    with pytest.raises(ProviderUnavailableError):
        await service.run("text", SummaryOptions(), profiles.get("text"))
