"""Tests for directive extraction."""

import pytest

from classica.domain.directives import BUY_TICKET, DirectiveGrammar, extract

EVENT_A = "3f2a8c1e-9b4d-4e7a-8c21-5d6f7a8b9c0d"
EVENT_B = "a1b2c3d4-0000-4000-8000-123456789abc"


class TestExtract:
    """Test extract() over zero, one and many directives."""

    def test_no_directive(self):
        target, text = extract("  Enjoy the concert!  ")

        assert target is None
        assert text == "Enjoy the concert!"

    def test_single_directive(self):
        target, text = extract(f"Great choice! Tickets are $42.00. [BUY_TICKET:{EVENT_A}]")

        assert target == EVENT_A
        assert text == "Great choice! Tickets are $42.00."

    def test_first_directive_wins_and_all_are_stripped(self):
        content = f"[BUY_TICKET:{EVENT_B}] Both are great. [BUY_TICKET:{EVENT_A}]"

        target, text = extract(content)

        assert target == EVENT_B
        assert "BUY_TICKET" not in text
        assert text == "Both are great."

    def test_uppercase_id_is_not_a_directive(self):
        content = "Try this [BUY_TICKET:ABC-123]"

        target, text = extract(content)

        assert target is None
        assert text == content

    def test_other_directive_names_are_left_alone(self):
        target, text = extract("See [ID:abc] here")

        assert target is None
        assert text == "See [ID:abc] here"


class TestDirectiveGrammar:
    """Test the grammar object used by prompts and the parser."""

    def test_placeholder(self):
        assert BUY_TICKET.placeholder == "[BUY_TICKET:<event_id>]"

    def test_render_round_trips_through_extract(self):
        rendered = BUY_TICKET.render(EVENT_A)

        result = BUY_TICKET.extract(f"Booked. {rendered}")

        assert result.found
        assert result.target_id == EVENT_A
        assert result.display_text == "Booked."

    def test_render_rejects_invalid_id(self):
        with pytest.raises(ValueError):
            BUY_TICKET.render("not an id")

    def test_invalid_name(self):
        with pytest.raises(ValueError):
            DirectiveGrammar("buy ticket")

    def test_custom_grammar_is_independent(self):
        save = DirectiveGrammar("SAVE_EVENT")

        result = save.extract(f"Saved! [SAVE_EVENT:{EVENT_A}] [BUY_TICKET:{EVENT_B}]")

        assert result.target_id == EVENT_A
        assert result.display_text == f"Saved!  [BUY_TICKET:{EVENT_B}]"
