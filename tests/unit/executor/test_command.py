"""Unit tests for ffmpeg command building."""

from pathlib import Path

import pytest

from vidpress.exceptions import UnsupportedOutputFormatError
from vidpress.executor.command import (
    build_compress_args,
    build_concat_args,
    format_manifest,
    letterbox_filter,
    prepare_output_path,
    scale_filter,
)
from vidpress.policy.types import EncodeJobConfig, EncoderKind


class TestPrepareOutputPath:
    """Tests for prepare_output_path."""

    def test_matching_suffix_kept(self) -> None:
        path, ext = prepare_output_path(Path("out/clip.mp4"), ".mp4")
        assert path == Path("out/clip.mp4")
        assert ext == ".mp4"

    def test_suffix_comparison_ignores_case(self) -> None:
        path, ext = prepare_output_path(Path("clip.MP4"), "mp4")
        assert path == Path("clip.MP4")
        assert ext == ".mp4"

    def test_different_suffix_is_appended(self) -> None:
        path, _ = prepare_output_path(Path("out/clip.mov"), ".mp4")
        assert path == Path("out/clip.mov.mp4")

    def test_no_suffix(self) -> None:
        path, ext = prepare_output_path(Path("clip"), "MKV")
        assert path == Path("clip.mkv")
        assert ext == ".mkv"

    def test_unsupported_extension(self) -> None:
        with pytest.raises(UnsupportedOutputFormatError) as exc_info:
            prepare_output_path(Path("clip.gif"), ".gif")
        assert exc_info.value.extension == ".gif"


class TestFilters:
    """Tests for the video filter strings."""

    def test_scale(self) -> None:
        assert scale_filter(1280, 720) == "scale=1280:720"

    def test_letterbox(self) -> None:
        assert letterbox_filter(1080, 1080) == (
            "scale=1080:1080:force_original_aspect_ratio=decrease,"
            "pad=1080:1080:(ow-iw)/2:(oh-ih)/2,setsar=1"
        )


class TestBuildCompressArgs:
    """Tests for build_compress_args."""

    def test_software_with_scaling(self) -> None:
        job = EncodeJobConfig(
            fps=24,
            bitrate_kbps=2500,
            quality=23,
            width=1280,
            height=720,
            encoder=EncoderKind.SOFTWARE,
            output_extension=".mkv",
        )
        args = build_compress_args(Path("in.mov"), Path("out.mkv"), job, ".mkv")
        assert args == [
            "-i",
            "in.mov",
            "-c:v",
            "libx265",
            "-preset",
            "medium",
            "-crf",
            "23",
            "-b:v",
            "2500k",
            "-maxrate",
            "2500k",
            "-bufsize",
            "5000k",
            "-r",
            "24",
            "-vf",
            "scale=1280:720",
            "-f",
            "matroska",
            "out.mkv",
            "-y",
        ]

    def test_no_scaling_without_dimensions(self) -> None:
        job = EncodeJobConfig(bitrate_kbps=5000)
        args = build_compress_args(Path("in.mp4"), Path("out.mp4"), job, ".mp4")
        assert "-vf" not in args
        assert args[-4:] == ["-f", "mp4", "out.mp4", "-y"]
        assert args[args.index("-r") + 1] == "32"


class TestFormatManifest:
    """Tests for format_manifest."""

    def test_one_line_per_segment(self) -> None:
        text = format_manifest([Path("/tmp/seg_000.mp4"), Path("/tmp/seg_001.mp4")])
        assert text == "file '/tmp/seg_000.mp4'\nfile '/tmp/seg_001.mp4'\n"

    def test_escapes_single_quotes(self) -> None:
        text = format_manifest([Path("/tmp/it's/seg_000.mp4")])
        assert text == "file '/tmp/it'\\''s/seg_000.mp4'\n"

    def test_empty(self) -> None:
        assert format_manifest([]) == ""


class TestBuildConcatArgs:
    """Tests for build_concat_args."""

    def test_concat_command(self) -> None:
        job = EncodeJobConfig(bitrate_kbps=5000, width=1080, height=1080)
        args = build_concat_args(
            Path("/tmp/files.txt"), Path("merged.ts"), job, ".ts", 1080, 1080
        )
        assert args[:6] == ["-f", "concat", "-safe", "0", "-i", "/tmp/files.txt"]
        assert args[6:8] == ["-vf", letterbox_filter(1080, 1080)]
        assert args[8:10] == ["-c:v", "hevc_nvenc"]
        assert args[-4:] == ["-f", "mpegts", "merged.ts", "-y"]
