"""
Tests for the Subtitle Interval Loader.
"""

import pytest
from skipper.errors import NoTimingsError, SubtitleReadError, UnsupportedFormatError
from skipper.loader import (
    DialogueInterval,
    SubtitleFormat,
    SubtitleSet,
    clean_path,
    detect_format,
    load_subtitle_file,
    parse_intervals,
)


class TestParseSrt:
    """Test SubRip interval extraction."""

    def test_blocks(self):
        text = (
            "1\n00:00:01,000 --> 00:00:02,000\nOne\n\n"
            "2\n00:00:03,000 --> 00:00:04,500\nTwo\n"
        )
        subs = parse_intervals(text, SubtitleFormat.SRT)
        assert list(subs) == [DialogueInterval(1.0, 2.0), DialogueInterval(3.0, 4.5)]

    def test_out_of_order_blocks_are_sorted(self):
        text = (
            "2\n00:00:30,000 --> 00:00:31,000\nLater\n\n"
            "1\n00:00:05,000 --> 00:00:06,000\nEarlier\n\n"
            "3\n00:00:15,000 --> 00:00:16,000\nMiddle\n"
        )
        subs = parse_intervals(text, SubtitleFormat.SRT)
        assert [iv.start for iv in subs] == [5.0, 15.0, 30.0]

    def test_corrupt_lines_skipped(self):
        text = (
            "1\n00:00:01,000 --> 00:00:02,000\nGood\n\n"
            "2\n00:00:xx,000 --> 00:00:04,000\nBad start\n\n"
            "3\n00:00:05,000 -> 00:00:06,000\nBad arrow\n\n"
            "4\n00:00:07,000 --> 00:00:08,000\nGood\n"
        )
        subs = parse_intervals(text, SubtitleFormat.SRT)
        assert len(subs) == 2

    def test_end_before_start_skipped(self):
        text = (
            "1\n00:00:20,000 --> 00:00:10,000\nBackwards\n\n"
            "2\n00:00:30,000 --> 00:00:30,000\nZero length\n"
        )
        subs = parse_intervals(text, SubtitleFormat.SRT)
        assert list(subs) == [DialogueInterval(30.0, 30.0)]

    def test_crlf_and_dot_separator(self):
        text = "1\r\n00:00:01.500 --> 00:00:02.000\r\nHi\r\n"
        subs = parse_intervals(text, SubtitleFormat.SRT)
        assert list(subs) == [DialogueInterval(1.5, 2.0)]

    def test_position_metadata_after_timing(self):
        text = "1\n00:00:01,000 --> 00:00:02,000 X1:40 X2:600 Y1:20 Y2:50\nHi\n"
        subs = parse_intervals(text, SubtitleFormat.SRT)
        assert list(subs) == [DialogueInterval(1.0, 2.0)]

    def test_empty(self):
        assert len(parse_intervals("", SubtitleFormat.SRT)) == 0


class TestParseAss:
    """Test ASS [Events] section scanning."""

    def test_sample(self):
        from conftest import SAMPLE_ASS
        subs = parse_intervals(SAMPLE_ASS, SubtitleFormat.ASS)
        assert list(subs) == [
            DialogueInterval(10.0, 12.0),
            DialogueInterval(20.5, 23.25),
        ]

    def test_dialogue_before_events_ignored(self):
        text = (
            "[Script Info]\n"
            "Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,too early\n"
            "[Events]\n"
            "Dialogue: 0,0:00:03.00,0:00:04.00,Default,,0,0,0,,counted\n"
        )
        subs = parse_intervals(text, SubtitleFormat.ASS)
        assert list(subs) == [DialogueInterval(3.0, 4.0)]

    def test_malformed_dialogue_skipped(self):
        text = (
            "[Events]\n"
            "Dialogue: 0,garbage,0:00:02.00,Default,,0,0,0,,bad\n"
            "Dialogue: 0\n"
            "Dialogue: 0,0:00:05.00,0:00:06.00,Default,,0,0,0,,good\n"
        )
        subs = parse_intervals(text, SubtitleFormat.ASS)
        assert len(subs) == 1

    def test_end_before_start_skipped(self):
        text = (
            "[Events]\n"
            "Dialogue: 0,0:00:08.00,0:00:07.00,Default,,0,0,0,,backwards\n"
            "Dialogue: 0,0:00:05.00,0:00:06.00,Default,,0,0,0,,good\n"
        )
        subs = parse_intervals(text, SubtitleFormat.ASS)
        assert list(subs) == [DialogueInterval(5.0, 6.0)]

    def test_sorted(self):
        text = (
            "[Events]\n"
            "Dialogue: 0,0:00:09.00,0:00:10.00,Default,,0,0,0,,b\n"
            "Dialogue: 0,0:00:01.00,0:00:02.00,Default,,0,0,0,,a\n"
        )
        subs = parse_intervals(text, SubtitleFormat.ASS)
        assert subs[0].start == 1.0


class TestCleanPath:
    """Test normalisation of paths reported by the player."""

    def test_plain_path_unchanged(self):
        assert clean_path("/home/user/movie.srt") == "/home/user/movie.srt"

    def test_file_uri_posix(self):
        assert clean_path("file:///home/user/movie.srt") == "/home/user/movie.srt"

    def test_file_uri_windows_drive(self):
        assert clean_path("file:///C:/Videos/movie.srt") == "C:/Videos/movie.srt"

    def test_percent_decoding(self):
        assert clean_path("file:///home/user/my%20movie.srt") == "/home/user/my movie.srt"

    def test_percent_decoding_utf8(self):
        assert clean_path("/subs/%E6%97%A5%E6%9C%AC.srt") == "/subs/日本.srt"


class TestDetectFormat:

    def test_srt_case_insensitive(self):
        assert detect_format("/a/Movie.SRT") is SubtitleFormat.SRT

    def test_ass(self):
        assert detect_format("/a/movie.ass") is SubtitleFormat.ASS

    def test_unsupported(self):
        with pytest.raises(UnsupportedFormatError):
            detect_format("/a/movie.vtt")


class TestLoadSubtitleFile:
    """Test the full load path against real files."""

    def test_load_srt(self, srt_file):
        result = load_subtitle_file(str(srt_file))
        assert result.format is SubtitleFormat.SRT
        assert result.count == 3
        assert result.subtitle_set[0] == DialogueInterval(10.0, 12.0)

    def test_load_ass(self, ass_file):
        result = load_subtitle_file(str(ass_file))
        assert result.format is SubtitleFormat.ASS
        assert result.count == 2

    def test_load_file_uri(self, srt_file):
        result = load_subtitle_file(srt_file.as_uri())
        assert result.count == 3
        assert result.path == str(srt_file)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SubtitleReadError):
            load_subtitle_file(str(tmp_path / "missing.srt"))

    def test_unsupported_format_not_read(self, tmp_path):
        # The file does not exist: the format check must fail first.
        with pytest.raises(UnsupportedFormatError):
            load_subtitle_file(str(tmp_path / "missing.sub"))

    def test_no_timings(self, tmp_path):
        path = tmp_path / "empty.srt"
        path.write_text("1\nno timing here\n", encoding="utf-8")
        with pytest.raises(NoTimingsError):
            load_subtitle_file(str(path))

    def test_utf8_bom_and_non_ascii_path(self, tmp_path):
        path = tmp_path / "字幕.srt"
        path.write_bytes("\ufeff1\n00:00:01,000 --> 00:00:02,000\nÉté\n".encode("utf-8"))
        result = load_subtitle_file(str(path))
        assert result.count == 1


class TestSubtitleSet:

    def test_sorted_on_construction(self):
        subs = SubtitleSet([DialogueInterval(5, 6), DialogueInterval(1, 2)])
        assert [iv.start for iv in subs] == [1, 5]

    def test_interval_is_immutable(self):
        iv = DialogueInterval(1.0, 2.0)
        with pytest.raises(AttributeError):
            iv.start = 3.0
