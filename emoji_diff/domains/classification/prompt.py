from __future__ import annotations

from emoji_diff.shared.types import ChangeMetrics, ClassificationRequest


CONTENT_ANALYSIS_TEMPLATE = """You are a code reviewer estimating how long/complex a PR review will be based on the git diff.

Analyze the following git diff and choose an animal emoji that represents the review complexity.
Consider:
- Type of files changed (tests, core logic, UI, config, migrations)
- Complexity of changes (simple updates vs architectural changes)
- Risk level (data models, API contracts, security, breaking changes)
- Whether changes are mostly additions, deletions, or modifications

Emoji scale for estimated review time/difficulty:
🐜 = Trivial review (5 min): typos, formatting, simple config
🐭 = Quick review (15 min): small bug fixes, test updates, documentation
🐰 = Standard review (30 min): typical feature work, straightforward logic
🦊 = Moderate review (1 hour): cross-cutting changes, refactoring, multiple components
🐻 = Substantial review (2 hours): complex logic, state management, algorithmic changes
🐘 = Major review (4+ hours): architectural changes, large features, system design
🦖 = Critical review (requires multiple passes): security, data migrations, breaking API changes

Git diff to analyze:
```diff
{diff_content}
```

Respond with JSON containing:
1. 'emoji': The single animal emoji representing review complexity
2. 'reasoning': Brief explanation of what makes this review that complexity level (mention specific file types or patterns you noticed)

Format: {{"emoji": "🐜", "reasoning": "Only documentation updates in README files"}}"""


METRICS_TEMPLATE = """You are a code reviewer estimating the size of a pending change from its line counts.

The change against the base branch has:
- Lines added: {added}
- Lines removed: {removed}
- Total lines changed: {total}

Choose the single animal emoji that best represents the size and review complexity of this change:
🐜 = Tiny (under 10 lines)
🐭 = Small (10-50 lines)
🐰 = Medium (50-200 lines)
🦊 = Sizeable (200-500 lines)
🐻 = Large (500-1000 lines)
🐘 = Very large (1000-3000 lines)
🦖 = Huge (more than 3000 lines)

Respond with JSON containing:
1. 'emoji': The single animal emoji representing the change size
2. 'reasoning': Brief explanation referring to the line counts

Format: {{"emoji": "🐰", "reasoning": "About 120 lines changed, mostly additions"}}"""


def truncation_marker(max_chars: int) -> str:
    return f"[DIFF TRUNCATED - showing first {max_chars:,} characters of larger change]"


def truncate_text(content: str, max_chars: int) -> tuple[str, bool]:
    if len(content) <= max_chars:
        return content, False
    return content[:max_chars], True


def render_content_prompt(diff_text: str, max_chars: int) -> str:
    """diff 본문을 상한 길이로 자른 뒤 7단계 이모지 척도 프롬프트에 삽입한다."""
    diff_content, truncated = truncate_text(diff_text, max_chars)
    if truncated:
        diff_content = f"{diff_content}\n\n{truncation_marker(max_chars)}"
    return CONTENT_ANALYSIS_TEMPLATE.format(diff_content=diff_content)


def render_metrics_prompt(metrics: ChangeMetrics) -> str:
    return METRICS_TEMPLATE.format(
        added=metrics.added,
        removed=metrics.removed,
        total=metrics.total,
    )


def build_content_request(model: str, diff_text: str, max_chars: int) -> ClassificationRequest:
    return ClassificationRequest(
        model=model,
        prompt_text=render_content_prompt(diff_text, max_chars),
    )


def build_metrics_request(model: str, metrics: ChangeMetrics) -> ClassificationRequest:
    return ClassificationRequest(model=model, prompt_text=render_metrics_prompt(metrics))
