"""
Tests for the command-line entry point.

Tests argument parsing and storage directory resolution.
"""

from pathlib import Path

from mozart_core.server import OUTPUT_DIR_ENV, SCORES_DIR_ENV, build_parser, resolve_storage


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self) -> None:
        """stdio on port 8000 with no storage overrides."""
        args = build_parser().parse_args([])
        assert args.transport == "stdio"
        assert args.port == 8000
        assert args.scores_dir is None
        assert args.output_dir is None
        assert not args.debug

    def test_http_with_dirs(self) -> None:
        """Directories parse as paths."""
        args = build_parser().parse_args(
            ["--transport", "http", "--port", "9000", "--scores-dir", "s", "--output-dir", "o"]
        )
        assert args.transport == "http"
        assert args.port == 9000
        assert args.scores_dir == Path("s")
        assert args.output_dir == Path("o")


class TestResolveStorage:
    """Tests for storage directory resolution."""

    def test_falls_back_to_cwd(self) -> None:
        """Without flags or environment, ./scores and ./output are used."""
        env: dict[str, str] = {}
        scores, output = resolve_storage(build_parser().parse_args([]), env)
        assert scores == Path.cwd() / "scores"
        assert output == Path.cwd() / "output"
        assert env == {}

    def test_environment_is_used(self, temp_dir: Path) -> None:
        """Environment values apply when no flag is given."""
        env = {SCORES_DIR_ENV: str(temp_dir / "s"), OUTPUT_DIR_ENV: str(temp_dir / "o")}
        scores, output = resolve_storage(build_parser().parse_args([]), env)
        assert scores == temp_dir / "s"
        assert output == temp_dir / "o"

    def test_flags_override_environment(self, temp_dir: Path) -> None:
        """Flags win and are published for the server module."""
        env = {SCORES_DIR_ENV: "elsewhere"}
        args = build_parser().parse_args(["--scores-dir", str(temp_dir / "mine")])
        scores, _ = resolve_storage(args, env)
        assert scores == temp_dir / "mine"
        assert env[SCORES_DIR_ENV] == str(temp_dir / "mine")
        assert OUTPUT_DIR_ENV not in env
