"""
Command-line front end for the BloomSphere client.

Usage:
    bloomsphere generate paper.pdf --text 5 --mcq 3 --preset high-order --accept-all
    bloomsphere score --file exam.pdf
    bloomsphere score --questions "What is photosynthesis?"
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from src.bloomsphere import config
from src.bloomsphere.core.aggregator import BarSegment
from src.bloomsphere.core.scorer import PaperScorer
from src.bloomsphere.core.workflow import Stage, WorkflowController
from src.bloomsphere.exceptions import BloomSphereError
from src.bloomsphere.models.question_models import QuestionStatus, QuestionType


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bloomsphere",
        description="Generate and score questions by Bloom's taxonomy level.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Generate questions from a PDF")
    generate.add_argument("file", help="Source PDF document")
    generate.add_argument("--text", type=int, default=config.DEFAULT_NUM_QUESTIONS["text"])
    generate.add_argument("--true-false", type=int, default=config.DEFAULT_NUM_QUESTIONS["trueFalse"])
    generate.add_argument("--mcq", type=int, default=config.DEFAULT_NUM_QUESTIONS["mcq"])
    generate.add_argument("--length", choices=config.QUESTION_LENGTHS, default=config.DEFAULT_QUESTION_LENGTH)
    generate.add_argument("--preset", choices=sorted(config.WEIGHT_PRESETS))
    generate.add_argument("--input", default="", help="Optional query or context")
    generate.add_argument("--accept-all", action="store_true", help="Accept and export every question")
    generate.add_argument("--out", default=config.OUTPUT_DIR, help="Export directory")

    score = subparsers.add_parser("score", help="Score a paper or pasted questions")
    score.add_argument("--file", help="PDF, PNG or JPG to score")
    score.add_argument("--questions", help="Questions separated by new lines")

    return parser


def format_bar(segments: List[BarSegment]) -> str:
    return ", ".join(f"{s.category.value} {s.percentage:.1f}%" for s in segments) or "no scores"


def display_questions(controller: WorkflowController):
    """Print the generated questions under review."""
    print("\n" + "=" * 70)
    print("GENERATED QUESTIONS")
    print("=" * 70)

    for q in controller.questions:
        print(f"\n[{q.id}] ({q.question_type.value}) {q.text}")
        if q.question_type == QuestionType.MCQ and q.options:
            for i, option in enumerate(q.options):
                marker = "✓" if option == q.answer else " "
                print(f"  {marker} {chr(97 + i)}) {option}")
        elif q.question_type == QuestionType.TRUE_FALSE:
            print(f"    Answer: {q.answer}")

    if controller.dropped_count:
        print(f"\n⚠️ {controller.dropped_count} item(s) in the response were not recognized")
    print("\n" + "=" * 70 + "\n")


async def run_generate(args: argparse.Namespace) -> int:
    controller = WorkflowController()

    controller.select_file(args.file)
    await controller.advance()

    controller.set_num_questions("text", args.text)
    controller.set_num_questions("trueFalse", args.true_false)
    controller.set_num_questions("mcq", args.mcq)
    controller.set_question_length(args.length)
    controller.user_input = args.input
    if not await controller.advance():
        print("✗ ERROR: Please select at least one question to generate.")
        return 1

    if args.preset:
        controller.weights.apply_preset(args.preset)

    print(f"Generating {controller.total_num_questions} question(s) from {controller.file.name}...")
    print("This may take a few moments as the service analyzes the document...\n")
    await controller.advance()

    if controller.stage != Stage.REVIEW:
        print(f"✗ ERROR: {controller.error}")
        return 1

    print(f"✓ {len(controller.questions)} question(s) generated successfully!")
    display_questions(controller)

    if args.accept_all:
        for q in controller.questions:
            controller.set_status(q.id, QuestionStatus.ACCEPTED)
        out_dir = Path(args.out)
        text_path = controller.save_text(out_dir / config.TEXT_EXPORT_FILE)
        pdf_path = controller.export_pdf(out_dir / config.PDF_EXPORT_FILE)
        print(f"✓ Text export saved to: {text_path}")
        print(f"✓ PDF export saved to: {pdf_path}")

    return 0


async def run_score(args: argparse.Namespace) -> int:
    scorer = PaperScorer()
    if args.file:
        scorer.select_file(args.file)
    scorer.question_text = args.questions or ""

    print("Scoring paper...\n")
    if not await scorer.submit():
        print(f"✗ ERROR: {scorer.error}")
        return 1

    summary = scorer.summary
    print("=" * 70)
    print("SCORING RESULTS")
    print("=" * 70)
    print(f"\nTotal Questions: {scorer.score_data.total_questions}")
    print(f"Overall Distribution: {format_bar(summary.overall)}")

    for item in summary.questions:
        print(f"\nQuestion {item.index + 1}: \"{item.question}\"")
        print(f"  Dominant: {item.dominant_category.value}")
        print(f"  {format_bar(item.segments)}")

    print("\n" + "=" * 70 + "\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the bloomsphere command."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("=" * 70)
    print("BLOOMSPHERE")
    print("AI-Powered Insights for Academic Excellence")
    print("=" * 70 + "\n")

    runner = run_generate if args.command == "generate" else run_score
    try:
        return asyncio.run(runner(args))
    except BloomSphereError as e:
        print(f"\n✗ ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
