"""Unit tests for the Message Formatter."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from backlog_digest.board import Card
from backlog_digest.digest import (
    DESCRIPTION_BUDGET,
    EMBED_COLOR,
    Embed,
    ReportBatch,
    batch_embeds,
    build_embeds_for_list,
    chunk_lines,
    escape_card_name,
    render_card_line,
)


def _card(index: int, name: str | None = None) -> Card:
    return Card(
        id=f"c{index}",
        name=name or f"Card number {index} with a reasonably descriptive title",
        url=f"https://trello.com/c/{index:08d}",
    )


@pytest.mark.unit
class TestRenderCardLine:
    """Tests for render_card_line and escape_card_name."""

    def test_plain_card(self) -> None:
        card = Card(id="c1", name="Write docs", url="https://trello.com/c/abc")
        assert render_card_line(card) == "- [Write docs](https://trello.com/c/abc)"

    def test_due_date_suffix(self) -> None:
        """Due dates render as the UTC calendar day only."""
        card = Card(
            id="c1",
            name="Ship",
            url="https://trello.com/c/abc",
            due=datetime(2024, 3, 5, 10, 0, tzinfo=UTC),
        )
        assert render_card_line(card) == "- [Ship](https://trello.com/c/abc) (Due: 2024-03-05)"

    def test_due_date_uses_utc_day(self) -> None:
        """A due instant late in the evening west of UTC lands on the next UTC day."""
        card = Card(
            id="c1",
            name="Ship",
            url="u",
            due=datetime(2024, 3, 5, 20, 0, tzinfo=timezone(timedelta(hours=-5))),
        )
        assert render_card_line(card).endswith("(Due: 2024-03-06)")

    def test_brackets_escaped(self) -> None:
        """Square brackets in names never reach the markdown link."""
        card = Card(id="c1", name="[WIP] Fix ]edge[ case", url="https://trello.com/c/abc")

        line = render_card_line(card)

        assert line == "- [［WIP］ Fix ］edge［ case](https://trello.com/c/abc)"
        assert line.count("[") == 1
        assert line.count("]") == 1

    def test_escape_card_name_leaves_other_text(self) -> None:
        assert escape_card_name("a (b) {c}") == "a (b) {c}"

    def test_long_name_shortened_inside_link(self) -> None:
        """An over-long name is cut so the link and due date survive intact."""
        card = Card(
            id="c1",
            name="[x]" + "n" * 200,
            url="https://trello.com/c/abc",
            due=datetime(2024, 3, 5, 10, 0, tzinfo=UTC),
        )

        line = render_card_line(card, budget=80)

        assert len(line) == 79
        assert line.startswith("- [［x］nnn")
        assert line.endswith("…](https://trello.com/c/abc) (Due: 2024-03-05)")
        assert line.count("[") == 1
        assert line.count("]") == 1

    def test_long_card_never_reaches_raw_cut(self) -> None:
        card = Card(id="c1", name="n" * 5000, url="https://trello.com/c/abc")

        (embed,) = build_embeds_for_list("Backlog", [card])

        assert len(embed.description) <= DESCRIPTION_BUDGET
        assert embed.description.endswith("…](https://trello.com/c/abc)")


@pytest.mark.unit
class TestChunkLines:
    """Tests for chunk_lines."""

    def test_empty_input(self) -> None:
        assert chunk_lines([]) == []

    def test_small_input_single_chunk(self) -> None:
        assert chunk_lines(["a", "b", "c"]) == ["a\nb\nc"]

    def test_chunks_respect_budget_and_preserve_lines(self) -> None:
        lines = [f"- line {i} " + "x" * (i % 90) for i in range(400)]

        chunks = chunk_lines(lines)

        assert len(chunks) > 1
        assert all(len(chunk) <= DESCRIPTION_BUDGET for chunk in chunks)
        assert "\n".join(chunks).split("\n") == lines

    def test_exact_fit_stays_in_one_chunk(self) -> None:
        """Two lines joined to exactly the budget are not split."""
        first = "a" * 10
        second = "b" * (20 - len(first) - 1)

        assert chunk_lines([first, second], budget=20) == [f"{first}\n{second}"]

    def test_one_over_budget_splits(self) -> None:
        first = "a" * 10
        second = "b" * 10

        assert chunk_lines([first, second], budget=20) == [first, second]

    def test_oversized_line_is_cut(self) -> None:
        """A line that can never fit is shortened instead of breaking the budget."""
        chunks = chunk_lines(["short", "z" * 50, "tail"], budget=20)

        assert chunks == ["short", "z" * 18 + "…", "tail"]
        assert all(len(chunk) <= 20 for chunk in chunks)

    def test_empty_lines_preserved(self) -> None:
        """Empty lines keep their place when chunks are joined back."""
        lines = ["", "a", "", "b", ""]

        chunks = chunk_lines(lines)

        assert "\n".join(chunks).split("\n") == lines

    def test_leading_empty_line_kept(self) -> None:
        assert chunk_lines(["", "a"]) == ["\na"]


@pytest.mark.unit
class TestBuildEmbedsForList:
    """Tests for build_embeds_for_list."""

    def test_single_embed(self, sample_cards: list[Card]) -> None:
        embeds = build_embeds_for_list("Product Backlog", sample_cards)

        assert embeds == [
            Embed(
                title="Backlog — Product Backlog",
                description=(
                    "- [Write onboarding doc](https://trello.com/c/aaa111)\n"
                    "- [Fix ［urgent］ login bug](https://trello.com/c/bbb222) (Due: 2024-03-05)"
                ),
                color=EMBED_COLOR,
            )
        ]

    def test_no_cards_no_embeds(self) -> None:
        assert build_embeds_for_list("Backlog", []) == []

    def test_long_list_splits_across_embeds(self) -> None:
        cards = [_card(i) for i in range(200)]

        embeds = build_embeds_for_list("Backlog", cards)

        assert len(embeds) > 1
        assert all(e.title == "Backlog — Backlog" for e in embeds)
        assert all(e.color == 3447003 for e in embeds)
        assert all(len(e.description) <= DESCRIPTION_BUDGET for e in embeds)
        joined = "\n".join(e.description for e in embeds)
        assert joined.split("\n") == [render_card_line(c) for c in cards]


@pytest.mark.unit
class TestBatchEmbeds:
    """Tests for batch_embeds and ReportBatch payloads."""

    def _embeds(self, count: int) -> list[Embed]:
        return [Embed(title=f"t{i}", description=f"d{i}", color=EMBED_COLOR) for i in range(count)]

    def test_batches_of_ten(self) -> None:
        batches = batch_embeds(self._embeds(23), lead="hello")

        assert [len(b.embeds) for b in batches] == [10, 10, 3]
        assert [b.content for b in batches] == ["hello", None, None]

    def test_order_preserved(self) -> None:
        embeds = self._embeds(12)

        batches = batch_embeds(embeds)

        assert [e for b in batches for e in b.embeds] == embeds

    def test_no_embeds_no_batches(self) -> None:
        assert batch_embeds([], lead="hello") == []

    def test_payload_with_content(self) -> None:
        batch = ReportBatch(embeds=self._embeds(1), content="lead")

        assert batch.to_payload() == {
            "content": "lead",
            "embeds": [{"title": "t0", "description": "d0", "color": EMBED_COLOR}],
        }

    def test_payload_without_content_omits_key(self) -> None:
        batch = ReportBatch(embeds=self._embeds(1))

        assert "content" not in batch.to_payload()
