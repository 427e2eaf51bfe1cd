"""Tests for attachment links in message text."""

import pytest
from hashtree_attachments.links import (
    FileLink,
    append_links_to_message,
    build_attachment_aware_preview,
    extract_file_links,
    format_file_link,
    is_image_filename,
    parse_file_link,
)
from .test_vectors import SAMPLE_NHASH


class TestFormatAndParse:
    """Test formatting and parsing single links."""

    def test_format_encodes_filename(self) -> None:
        """Spaces and reserved characters are percent-encoded."""
        link = format_file_link("nhash1qqsz", "hieno tanssi.mp4")
        assert link == "nhash1qqsz/hieno%20tanssi.mp4"

    def test_format_keeps_unreserved_characters(self) -> None:
        """URI-component unreserved characters are left alone."""
        assert format_file_link("nhash1qqsz", "a-b_c.d!e~f*g'h(i).png") == (
            "nhash1qqsz/a-b_c.d!e~f*g'h(i).png"
        )

    def test_format_encodes_slash_and_unicode(self) -> None:
        """Slashes and non-ASCII characters are encoded."""
        assert format_file_link("nhash1qqsz", "a/b ä.txt") == "nhash1qqsz/a%2Fb%20%C3%A4.txt"

    def test_parse_formatted_link(self) -> None:
        """A formatted link parses back to its parts."""
        parsed = parse_file_link(format_file_link("nhash1qqsz", "hieno tanssi.mp4"))

        assert parsed == FileLink(
            nhash="nhash1qqsz",
            filename="hieno tanssi.mp4",
            filename_encoded="hieno%20tanssi.mp4",
        )
        assert parsed.raw_link == "nhash1qqsz/hieno%20tanssi.mp4"

    @pytest.mark.parametrize("scheme", ["htree://", "nhash://", "HTREE://"])
    def test_parse_strips_scheme(self, scheme: str) -> None:
        """Optional schemes are removed."""
        parsed = parse_file_link(f"{scheme}nhash1qqsz/test.jpg")

        assert parsed is not None
        assert parsed.nhash == "nhash1qqsz"
        assert parsed.filename == "test.jpg"

    def test_parse_uppercase_prefix(self) -> None:
        """The nhash1 prefix is case-insensitive."""
        parsed = parse_file_link("NHASH1QQSZ/test.jpg")
        assert parsed is not None
        assert parsed.nhash == "NHASH1QQSZ"

    def test_parse_keeps_nested_slashes_in_filename(self) -> None:
        """Only the first slash separates the nhash."""
        parsed = parse_file_link("nhash1qqsz/dir/file.txt")
        assert parsed is not None
        assert parsed.filename_encoded == "dir/file.txt"

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "nhash1qqsz",
            "nhash1qqsz/",
            "/file.png",
            "npub1qqsz/file.png",
            "nhash2qqsz/file.png",
            "htree://",
            "https://example.com/file.png",
        ],
    )
    def test_parse_rejects(self, value: str) -> None:
        """Values that are not attachment links parse to None."""
        assert parse_file_link(value) is None

    @pytest.mark.parametrize("encoded", ["bad%zzname.png", "trail%", "bad%ffutf8.png"])
    def test_undecodable_filename_kept_raw(self, encoded: str) -> None:
        """Filenames that fail percent-decoding are used as-is."""
        parsed = parse_file_link(f"nhash1qqsz/{encoded}")
        assert parsed is not None
        assert parsed.filename == encoded
        assert parsed.filename_encoded == encoded


class TestExtract:
    """Test extracting links from message text."""

    def test_extract_single_link(self) -> None:
        """A link after text is removed and returned."""
        extracted = extract_file_links("hello htree://nhash1xyz/file.png")

        assert extracted.text == "hello"
        assert len(extracted.links) == 1
        assert extracted.links[0].filename == "file.png"
        assert extracted.links[0].nhash == "nhash1xyz"

    def test_extract_multiple_links_in_order(self) -> None:
        """Links are returned in order of appearance."""
        extracted = extract_file_links(
            "hello\nnhash1qqsz/file.png\nand htree://nhash1xyz/video.mp4"
        )

        assert [link.filename for link in extracted.links] == ["file.png", "video.mp4"]
        assert extracted.text == "hello\n\nand"

    def test_extract_real_reference(self) -> None:
        """A full-length nhash link is extracted intact."""
        text = f"look\n{format_file_link(SAMPLE_NHASH, 'cat photo.png')}"
        extracted = extract_file_links(text)

        assert extracted.text == "look"
        assert extracted.links[0].nhash == SAMPLE_NHASH
        assert extracted.links[0].filename == "cat photo.png"

    def test_invalid_prefix_left_in_text(self) -> None:
        """Tokens with another prefix are not touched."""
        text = "see nhash2qqsz/file.png here"
        extracted = extract_file_links(text)

        assert extracted.text == text
        assert extracted.links == []

    def test_non_bech32_characters_left_in_text(self) -> None:
        """Tokens whose id contains characters outside the bech32 charset stay."""
        text = "ref nhash1abc/file.png"
        extracted = extract_file_links(text)

        assert extracted.text == text
        assert extracted.links == []

    def test_plain_text(self) -> None:
        """Text without links is only trimmed."""
        extracted = extract_file_links("  just words  ")

        assert extracted.text == "just words"
        assert extracted.links == []

    def test_case_insensitive(self) -> None:
        """Uppercase links are recognised."""
        extracted = extract_file_links("HTREE://NHASH1QQSZ/FILE.PNG")

        assert extracted.text == ""
        assert extracted.links[0].filename == "FILE.PNG"

    def test_round_trip_with_append(self) -> None:
        """Appending and extracting links recovers text and links."""
        links = [format_file_link("nhash1qqsz", "one.png"), format_file_link("nhash1xyz", "two.jpg")]
        content = append_links_to_message("Look at this", links)
        extracted = extract_file_links(content)

        assert extracted.text == "Look at this"
        assert [link.raw_link for link in extracted.links] == links


class TestAppend:
    """Test appending links to message text."""

    def test_text_and_links(self) -> None:
        """Links follow the text, one per line."""
        content = append_links_to_message(
            "Look at this",
            ["nhash1qqsz/one.png", "nhash1xyz/two.jpg"],
        )
        assert content == "Look at this\nnhash1qqsz/one.png\nnhash1xyz/two.jpg"

    def test_links_only(self) -> None:
        """Without text, only the links are returned."""
        assert append_links_to_message("   ", ["nhash1qqsz/one.png"]) == "nhash1qqsz/one.png"

    def test_text_only(self) -> None:
        """Without links, the trimmed text is returned."""
        assert append_links_to_message("  hi  ", []) == "hi"

    def test_blank_links_dropped(self) -> None:
        """Blank links are ignored and others trimmed."""
        content = append_links_to_message("hi", ["", "  ", " nhash1qqsz/one.png "])
        assert content == "hi\nnhash1qqsz/one.png"


class TestPreview:
    """Test conversation previews."""

    def test_single_attachment(self) -> None:
        """Attachment-only messages show the filename."""
        assert build_attachment_aware_preview("nhash1qqsz/cat.png") == "Attachment: cat.png"

    def test_multiple_attachments(self) -> None:
        """Several attachments show a count."""
        preview = build_attachment_aware_preview("nhash1qqsz/cat.png\nnhash1xyz/dog.png")
        assert preview == "2 attachments"

    def test_text_wins(self) -> None:
        """Remaining text is preferred over attachment summaries."""
        assert build_attachment_aware_preview("hi nhash1qqsz/cat.png") == "hi"

    def test_empty(self) -> None:
        """Empty messages give an empty preview."""
        assert build_attachment_aware_preview("") == ""

    def test_truncation(self) -> None:
        """Long text is cut to max_length and marked."""
        preview = build_attachment_aware_preview("x" * 60)
        assert preview == "x" * 50 + "..."

    def test_exact_length_not_truncated(self) -> None:
        """Text of exactly max_length is kept."""
        assert build_attachment_aware_preview("y" * 50) == "y" * 50

    def test_custom_max_length(self) -> None:
        """Attachment summaries are truncated too."""
        preview = build_attachment_aware_preview("nhash1qqsz/a-very-long-name.png", max_length=10)
        assert preview == "Attachment..."


class TestImageFilename:
    """Test image extension detection."""

    @pytest.mark.parametrize("name", ["photo.jpg", "photo.JPEG", "a.png", "b.gif", "c.webp", "d.svg", "e.bmp"])
    def test_images(self, name: str) -> None:
        """Common image extensions are recognised."""
        assert is_image_filename(name)

    @pytest.mark.parametrize("name", ["clip.mp4", "document.pdf", "noext", "png"])
    def test_non_images(self, name: str) -> None:
        """Other files are not images."""
        assert not is_image_filename(name)
