"""Tests for question/answer extraction."""

from qbank.pipeline.qa import extract_qa_items


class TestExtractQAItems:
    """Test the blockquote question + Detailed Answer heuristic."""

    def test_single_item(self):
        body = (
            "\n"
            "> \"What is encapsulation?\"\n"
            "\n"
            "**Detailed Answer:**\n"
            "\n"
            "Bundling data with the methods that operate on it.\n"
        )

        items = extract_qa_items("oop.md#q1", body)

        assert len(items) == 1
        item = items[0]
        assert item.id == "oop.md#q1/q1"
        assert item.section_id == "oop.md#q1"
        assert item.question == "What is encapsulation?"
        assert item.answer == "Bundling data with the methods that operate on it."
        assert item.text == body[1:]

    def test_answer_on_marker_line(self):
        body = "> \"Why?\"\n**Detailed Answer**: Because.\nMore.\n"

        items = extract_qa_items("s", body)

        assert items[0].answer == "Because.\nMore."

    def test_multiple_items_split_at_next_question(self):
        body = (
            "Intro paragraph.\n"
            "> \"First?\"\n"
            "**Detailed Answer:** one\n"
            "> \"Second?\"\n"
            "**Detailed Answer:** two\n"
        )

        items = extract_qa_items("s", body)

        assert [item.question for item in items] == ["First?", "Second?"]
        assert [item.answer for item in items] == ["one", "two"]
        assert [item.ordinal for item in items] == [0, 1]
        assert [item.id for item in items] == ["s/q1", "s/q2"]
        assert "Intro paragraph." not in items[0].text

    def test_question_without_marker_is_skipped(self):
        body = (
            "> \"Rhetorical?\"\n"
            "Just prose.\n"
            "> \"Real?\"\n"
            "**Detailed Answer:** yes\n"
        )

        items = extract_qa_items("s", body)

        assert [item.question for item in items] == ["Real?"]

    def test_trailing_question_without_marker_ends_previous_answer(self):
        body = (
            "> \"Real?\"\n"
            "**Detailed Answer:** yes\n"
            "> \"Rhetorical?\"\n"
            "Just prose.\n"
        )

        items = extract_qa_items("s", body)

        assert len(items) == 1
        assert items[0].answer == "yes"
        assert items[0].text == "> \"Real?\"\n**Detailed Answer:** yes\n"
        assert "Rhetorical" not in items[0].text

    def test_multiline_blockquote_question(self):
        body = (
            "> \"Explain the difference between\n"
            "> an abstract class and an interface.\"\n"
            "\n"
            "**Detailed Answer:** Interfaces carry no state.\n"
        )

        items = extract_qa_items("s", body)

        assert items[0].question == (
            "Explain the difference between an abstract class and an interface."
        )

    def test_typographic_quotes(self):
        body = "> “What is SOLID?”\n**Detailed Answer:** Five principles.\n"

        items = extract_qa_items("s", body)

        assert items[0].question == "What is SOLID?"

    def test_plain_blockquote_is_not_a_question(self):
        body = "> Note: remember this\n**Detailed Answer:** nope\n"

        assert extract_qa_items("s", body) == ()

    def test_marker_inside_code_fence_is_ignored(self):
        body = (
            "> \"Show code?\"\n"
            "```\n"
            "**Detailed Answer:**\n"
            "```\n"
        )

        assert extract_qa_items("s", body) == ()

    def test_no_shape_yields_no_items(self):
        assert extract_qa_items("s", "Just some prose.\n") == ()
        assert extract_qa_items("s", "") == ()
