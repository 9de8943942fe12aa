"""
Tests for the bloomsphere command-line front end (cli.py).
"""
from unittest.mock import patch

import pytest

from src.bloomsphere import config
from src.bloomsphere.cli import build_parser, format_bar, main
from src.bloomsphere.core.aggregator import BarSegment
from src.bloomsphere.exceptions import ServiceError
from src.bloomsphere.models.bloom_models import BloomCategory


@pytest.mark.unit
class TestParser:
    """Test argument parsing."""

    def test_generate_defaults(self):
        args = build_parser().parse_args(["generate", "paper.pdf"])

        assert args.text == 5
        assert args.true_false == 0
        assert args.mcq == 0
        assert args.length == "Medium"
        assert args.preset is None
        assert args.out == config.OUTPUT_DIR

    def test_unknown_preset_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["generate", "paper.pdf", "--preset", "extreme"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


@pytest.mark.unit
def test_format_bar():
    segments = [
        BarSegment(BloomCategory.REMEMBERING, 75.0, "75%"),
        BarSegment(BloomCategory.CREATING, 25.0, "25%"),
    ]

    assert format_bar(segments) == "Remembering 75.0%, Creating 25.0%"
    assert format_bar([]) == "no scores"


@pytest.mark.integration
class TestGenerateCommand:
    """Test the generate subcommand end to end with a fake service."""

    def test_generate_and_export(self, fake_client, sample_pdf, temp_dir, capsys):
        out_dir = temp_dir / "exports"

        with patch("src.bloomsphere.core.workflow.BloomSphereClient", return_value=fake_client):
            code = main([
                "generate", str(sample_pdf), "--mcq", "1", "--true-false", "1",
                "--preset", "recall", "--accept-all", "--out", str(out_dir),
            ])

        output = capsys.readouterr().out
        assert code == 0
        assert "3 question(s) generated successfully" in output
        assert "✓ b) Lyon" in output
        weights = fake_client.generate_calls[0].config.bloom_weights
        assert weights["Remembering"] == 30
        assert (out_dir / config.TEXT_EXPORT_FILE).read_text(encoding="utf-8").startswith("1. ")
        assert (out_dir / config.PDF_EXPORT_FILE).read_bytes().startswith(b"%PDF")

    def test_zero_questions(self, fake_client, sample_pdf, capsys):
        with patch("src.bloomsphere.core.workflow.BloomSphereClient", return_value=fake_client):
            code = main(["generate", str(sample_pdf), "--text", "0"])

        assert code == 1
        assert "at least one question" in capsys.readouterr().out
        assert fake_client.generate_calls == []

    def test_service_failure(self, fake_client, sample_pdf, capsys):
        fake_client.error = ServiceError("Model overloaded")

        with patch("src.bloomsphere.core.workflow.BloomSphereClient", return_value=fake_client):
            code = main(["generate", str(sample_pdf)])

        assert code == 1
        assert "Failed to generate questions: Model overloaded" in capsys.readouterr().out

    def test_invalid_file(self, fake_client, sample_txt, capsys):
        with patch("src.bloomsphere.core.workflow.BloomSphereClient", return_value=fake_client):
            code = main(["generate", str(sample_txt)])

        assert code == 1
        assert "Please upload a PDF file." in capsys.readouterr().out


@pytest.mark.integration
class TestScoreCommand:
    """Test the score subcommand end to end with a fake service."""

    def test_score_questions(self, fake_client, capsys):
        with patch("src.bloomsphere.core.scorer.BloomSphereClient", return_value=fake_client):
            code = main(["score", "--questions", "Define photosynthesis."])

        output = capsys.readouterr().out
        assert code == 0
        assert "Total Questions: 2" in output
        assert "Dominant: Creating" in output

    def test_score_without_input(self, fake_client, capsys):
        with patch("src.bloomsphere.core.scorer.BloomSphereClient", return_value=fake_client):
            code = main(["score"])

        assert code == 1
        assert "Please upload a file or paste questions." in capsys.readouterr().out
