"""Tests for the command line tools."""

from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from content_safety.cli import analyze, config, moderate, sanitize


@pytest.fixture
def runner():
    return CliRunner()


def write(temp_dir, name, content):
    path = Path(temp_dir) / name
    path.write_text(content, encoding="utf-8")
    return str(path)


class TestSanitizeCommand:
    """Test cases for content-safety-sanitize."""

    def test_sanitize_to_stdout(self, runner, temp_dir):
        """Test printing sanitized text."""
        input_file = write(temp_dir, "in.txt", "<script>alert(1)</script>Hello")

        result = runner.invoke(sanitize.main, [input_file])

        assert result.exit_code == 0
        assert ">1)Hello" in result.output

    def test_strict_level(self, runner, temp_dir):
        """Test the --level option."""
        input_file = write(temp_dir, "in.txt", "<script>alert(1)</script>Hello")

        result = runner.invoke(sanitize.main, [input_file, "--level", "strict"])

        assert result.exit_code == 0
        assert result.output.strip().endswith("1)Hello")
        assert ">" not in result.output

    def test_encode_option(self, runner, temp_dir):
        """Test encoding the sanitized text."""
        input_file = write(temp_dir, "in.txt", "a < b")

        result = runner.invoke(sanitize.main, [input_file, "--encode", "html"])

        assert result.exit_code == 0
        assert "a &lt; b" in result.output

    def test_output_file(self, runner, temp_dir):
        """Test writing the result to a file."""
        input_file = write(temp_dir, "in.txt", "  hello\x00 world  ")
        output_file = str(Path(temp_dir) / "out.txt")

        result = runner.invoke(sanitize.main, [input_file, "-o", output_file])

        assert result.exit_code == 0
        assert Path(output_file).read_text(encoding="utf-8") == "hello world"

    def test_unsupported_extension(self, runner, temp_dir):
        """Test that unsupported files fail cleanly."""
        input_file = write(temp_dir, "in.exe", "hello")

        result = runner.invoke(sanitize.main, [input_file])

        assert result.exit_code == 1
        assert "Error reading input file" in result.output


class TestModerateCommand:
    """Test cases for content-safety-moderate."""

    def test_score_reported(self, runner, temp_dir):
        """Test the violation table and score."""
        input_file = write(temp_dir, "bio.txt", "buy now")

        result = runner.invoke(moderate.main, [input_file])

        assert result.exit_code == 0
        assert "Policy Violations" in result.output
        assert "Content score: 70/100" in result.output
        assert "Appropriate: False" in result.output

    def test_clean_text(self, runner, temp_dir):
        """Test output for clean text."""
        input_file = write(temp_dir, "bio.txt", "Nice to meet you")

        result = runner.invoke(moderate.main, [input_file])

        assert "No policy violations found" in result.output
        assert "Content score: 100/100" in result.output

    def test_filter_option(self, runner, temp_dir):
        """Test printing masked text."""
        input_file = write(temp_dir, "msg.txt", "what the hell")

        result = runner.invoke(moderate.main, [input_file, "--filter"])

        assert "what the ****" in result.output

    def test_valid_name(self, runner):
        """Test --name with a valid name."""
        result = runner.invoke(moderate.main, ["--name", "John Smith"])

        assert result.exit_code == 0
        assert "Name is valid" in result.output

    def test_invalid_name(self, runner):
        """Test --name with an invalid name."""
        result = runner.invoke(moderate.main, ["--name", "a"])

        assert "Name is invalid: Name must be at least 2 characters" in result.output

    def test_nothing_to_check(self, runner):
        """Test that a file or name is required."""
        result = runner.invoke(moderate.main, [])

        assert result.exit_code == 1


class TestAnalyzeCommand:
    """Test cases for content-safety-analyze."""

    def test_suspicious_profile(self, runner, profile_file):
        """Test output for a suspicious profile."""
        result = runner.invoke(analyze.main, [profile_file])

        assert result.exit_code == 0
        assert "Suspicion score: 0.75" in result.output
        assert "flag_for_review" in result.output
        assert "Behavior suspicion score: 1.00" in result.output
        assert "Queued for human review" in result.output

    def test_genuine_profile(self, runner, genuine_profile_file):
        """Test output for an unremarkable profile."""
        result = runner.invoke(analyze.main, [genuine_profile_file, "--timeout", "1"])

        assert result.exit_code == 0
        assert "No fake profile indicators found" in result.output
        assert "allow_profile" in result.output

    def test_invalid_profile(self, runner, temp_dir):
        """Test that malformed profiles fail cleanly."""
        profile = write(temp_dir, "bad.yml", "- not\n- a mapping\n")

        result = runner.invoke(analyze.main, [profile])

        assert result.exit_code == 1
        assert "Error loading profile" in result.output

    def test_invalid_config(self, runner, temp_dir, profile_file):
        """Test that an invalid config file fails cleanly."""
        config_file = write(temp_dir, "bad-config.yml", "analyzer:\n  max_workers: 0\n")

        result = runner.invoke(analyze.main, [profile_file, "--config", config_file])

        assert result.exit_code == 1
        assert "max_workers" in result.output


class TestConfigCommand:
    """Test cases for content-safety-config."""

    def test_init_creates_file(self, runner, temp_dir):
        """Test creating a default configuration file."""
        output = str(Path(temp_dir) / "content-safety.yml")

        result = runner.invoke(config.main, ["init", "-o", output])

        assert result.exit_code == 0
        with open(output, encoding="utf-8") as f:
            assert yaml.safe_load(f)["moderation"]["min_bio_score"] == 70

    def test_init_refuses_to_overwrite(self, runner, temp_dir):
        """Test that --force is needed to overwrite."""
        output = write(temp_dir, "content-safety.yml", "{}\n")

        result = runner.invoke(config.main, ["init", "-o", output])

        assert result.exit_code == 1
        assert Path(output).read_text(encoding="utf-8") == "{}\n"

    def test_validate(self, runner, temp_dir):
        """Test validating good and bad files."""
        good = write(temp_dir, "good.yml", "moderation:\n  min_bio_score: 60\n")
        bad = write(temp_dir, "bad.yml", "moderation:\n  min_bio_score: 600\n")

        good_result = runner.invoke(config.main, ["validate", good])
        bad_result = runner.invoke(config.main, ["validate", bad])

        assert good_result.exit_code == 0
        assert "Configuration file is valid" in good_result.output
        assert bad_result.exit_code == 1
        assert "between 0 and 100" in bad_result.output

    def test_show(self, runner, temp_dir):
        """Test showing a configuration file."""
        path = write(temp_dir, "c.yml", "analyzer:\n  max_workers: 2\n")

        result = runner.invoke(config.main, ["show", path])

        assert result.exit_code == 0
        assert "Configuration Summary" in result.output
        assert "max_workers" in result.output

    def test_set_value(self, runner, temp_dir):
        """Test setting a nested value."""
        path = write(temp_dir, "c.yml", "moderation:\n  min_bio_score: 70\n")

        result = runner.invoke(config.main, ["set", "moderation.min_bio_score", "60", path])

        assert result.exit_code == 0
        with open(path, encoding="utf-8") as f:
            assert yaml.safe_load(f)["moderation"]["min_bio_score"] == 60

    def test_set_invalid_value_refused(self, runner, temp_dir):
        """Test that an invalid value is not saved."""
        path = write(temp_dir, "c.yml", "analyzer:\n  max_workers: 4\n")

        result = runner.invoke(config.main, ["set", "analyzer.max_workers", "0", path])

        assert result.exit_code == 1
        with open(path, encoding="utf-8") as f:
            assert yaml.safe_load(f)["analyzer"]["max_workers"] == 4

    @pytest.mark.parametrize(
        "raw,expected",
        [("true", True), ("False", False), ("1.5", 1.5), ("10", 10), ("null", None), ("abc", "abc")],
    )
    def test_parse_value(self, raw, expected):
        """Test conversion of command line values."""
        assert config.parse_value(raw) == expected
