import pytest

from emoji_diff.domains.classification.interpreter import FALLBACK_EMOJI, NO_CHANGES_EMOJI
from emoji_diff.domains.classification.service import ClassificationOptions, EmojiDiffService
from emoji_diff.domains.diff.collector import GENERATED_FILE_PATTERNS
from emoji_diff.infra.clients.git import GitClient
from emoji_diff.shared.errors import ClassifierRequestError, GitCommandError, NotAGitRepositoryError
from tests.fakes import GENERATED_DIFF, SAMPLE_DIFF, FakeClassifier, FakeGitRunner, responses_payload


def _service(
    runner: FakeGitRunner,
    classifier: FakeClassifier,
    *,
    use_metrics_prompt: bool = False,
    max_diff_chars: int = 50000,
) -> EmojiDiffService:
    return EmojiDiffService(
        git_client=GitClient(runner=runner),
        classifier=classifier,
        options=ClassificationOptions(
            model="gpt-5-nano",
            use_metrics_prompt=use_metrics_prompt,
            max_diff_chars=max_diff_chars,
            exclude_patterns=GENERATED_FILE_PATTERNS,
        ),
    )


def test_empty_diff_skips_classifier() -> None:
    runner = FakeGitRunner(existing_refs=["refs/heads/main"], diff_output="")
    classifier = FakeClassifier()

    outcome = _service(runner, classifier).run()

    assert outcome.result.emoji == NO_CHANGES_EMOJI
    assert outcome.skipped is True
    assert classifier.requests == []
    assert runner.diff_calls()[0][3] == "main"


def test_generated_only_diff_skips_classifier() -> None:
    classifier = FakeClassifier()

    outcome = _service(FakeGitRunner(diff_output=GENERATED_DIFF), classifier).run()

    assert outcome.result.emoji == NO_CHANGES_EMOJI
    assert classifier.requests == []


def test_metadata_only_diff_skips_classifier() -> None:
    diff_text = (
        "diff --git a/run.sh b/run.sh\n"
        "old mode 100644\n"
        "new mode 100755\n"
    )
    classifier = FakeClassifier()

    outcome = _service(FakeGitRunner(diff_output=diff_text), classifier).run()

    assert outcome.result.emoji == NO_CHANGES_EMOJI
    assert outcome.metrics is not None
    assert outcome.metrics.total == 0
    assert classifier.requests == []


def test_content_mode_sends_diff() -> None:
    classifier = FakeClassifier(
        payload=responses_payload('{"emoji": "🦊", "reasoning": "refactor"}')
    )

    outcome = _service(FakeGitRunner(diff_output=SAMPLE_DIFF), classifier).run()

    assert outcome.result.emoji == "🦊"
    assert outcome.result.reasoning == "refactor"
    assert outcome.metrics.added == 2
    assert SAMPLE_DIFF in classifier.requests[0].prompt_text
    assert classifier.requests[0].model == "gpt-5-nano"


def test_metrics_mode_sends_counts_only() -> None:
    classifier = FakeClassifier(payload=responses_payload("🐭"))

    outcome = _service(
        FakeGitRunner(diff_output=SAMPLE_DIFF), classifier, use_metrics_prompt=True
    ).run()

    prompt_text = classifier.requests[0].prompt_text
    assert "Lines added: 2" in prompt_text
    assert "app/models.py" not in prompt_text
    assert outcome.result.emoji == "🐭"


def test_api_error_is_kept_and_falls_back() -> None:
    classifier = FakeClassifier(
        payload={"error": {"message": "Incorrect API key provided"}},
        error_message="Incorrect API key provided",
    )

    outcome = _service(FakeGitRunner(diff_output=SAMPLE_DIFF), classifier).run()

    assert outcome.result.emoji == FALLBACK_EMOJI
    assert outcome.api_error == "Incorrect API key provided"


def test_transport_failure_falls_back() -> None:
    classifier = FakeClassifier(exc=ClassifierRequestError("Classifier request failed"))

    outcome = _service(FakeGitRunner(diff_output=SAMPLE_DIFF), classifier).run()

    assert outcome.result.emoji == FALLBACK_EMOJI
    assert outcome.api_error == "Classifier request failed"


def test_not_a_repository_raises_before_diff() -> None:
    runner = FakeGitRunner(inside_repo=False)

    with pytest.raises(NotAGitRepositoryError):
        _service(runner, FakeClassifier()).run()

    assert runner.diff_calls() == []


def test_git_diff_failure_propagates() -> None:
    with pytest.raises(GitCommandError):
        _service(FakeGitRunner(diff_returncode=128), FakeClassifier()).run()
