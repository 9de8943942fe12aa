"""
Export accepted questions to plain text and to a paginated PDF.

The PDF layout is computed first as a DocumentLayout (pages of positioned
lines, in millimetres from the top-left corner) and then drawn with
ReportLab. Pagination is first-fit: before each block is written, the
block's height is compared against the space left on the page and a new
page is started when it does not fit. There is no lookahead.
"""
import logging
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, List, NamedTuple, Optional, Sequence, Tuple, Union

from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from src.bloomsphere import config
from src.bloomsphere.models.question_models import GeneratedQuestion, QuestionType

logger = logging.getLogger(__name__)

Font = Tuple[str, int]


def option_letter(index: int) -> str:
    return chr(ord("a") + index)


def answer_label(question: GeneratedQuestion) -> Optional[str]:
    """
    Text shown after "Answer: " for a question.

    MCQ answers resolve to their lettered option, e.g. "b) Lyon"; an answer
    that matches no option is shown as-is. Text questions have no answer.
    """
    if question.question_type == QuestionType.TRUE_FALSE:
        return "true" if question.answer else "false"
    if question.question_type == QuestionType.MCQ and question.options is not None:
        answer = str(question.answer)
        if answer in question.options:
            return f"{option_letter(question.options.index(answer))}) {answer}"
        return answer
    return None


def render_text(questions: Sequence[GeneratedQuestion]) -> str:
    """
    Render questions as numbered plain text separated by blank lines.

    Example:
        1. What is the capital of France?
           a) Paris
           b) Lyon
           Answer: a) Paris
    """
    blocks = []
    for number, question in enumerate(questions, 1):
        block = f"{number}. {question.text}"
        if question.question_type == QuestionType.TRUE_FALSE:
            block += f" (True/False)\n   Answer: {answer_label(question)}"
        elif question.question_type == QuestionType.MCQ and question.options is not None:
            options = "\n".join(
                f"   {option_letter(i)}) {option}" for i, option in enumerate(question.options))
            block += f"\n{options}"
            if question.answer is not None:
                block += f"\n   Answer: {answer_label(question)}"
        blocks.append(block)
    return "\n\n".join(blocks)


class PlacedLine(NamedTuple):
    text: str
    x: float
    y: float
    font: Font
    centered: bool = False


class DocumentLayout:
    """Pages of positioned lines with a vertical cursor."""

    def __init__(
        self,
        page_width: float = config.PDF_PAGE_WIDTH,
        page_height: float = config.PDF_PAGE_HEIGHT,
        margin: float = config.PDF_MARGIN
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.pages: List[List[PlacedLine]] = [[]]
        self.cursor = margin

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def new_page(self):
        self.pages.append([])
        self.cursor = self.margin

    def ensure_space(self, needed: float) -> bool:
        """Start a new page if a block of this height would overflow. Returns True on a break."""
        if self.cursor + needed > self.page_height - self.margin:
            self.new_page()
            return True
        return False

    def advance(self, amount: float):
        self.cursor += amount

    def place_block(
        self,
        lines: Sequence[str],
        x: float,
        font: Font,
        line_height: float,
        needed: Optional[float] = None,
        advance: Optional[float] = None,
        centered: bool = False
    ):
        """
        Write a block of lines at the cursor, breaking the page first if needed.

        Args:
            lines: Already-wrapped lines
            x: Horizontal position in mm
            font: (font name, size) pair
            line_height: Vertical distance between lines in mm
            needed: Height to reserve; defaults to len(lines) * line_height
            advance: Cursor movement after the block; defaults to len(lines) * line_height
            centered: Centre each line on x instead of left-aligning
        """
        block_height = len(lines) * line_height
        self.ensure_space(block_height if needed is None else needed)

        page = self.pages[-1]
        for i, line in enumerate(lines):
            page.append(PlacedLine(line, x, self.cursor + i * line_height, font, centered))

        self.advance(block_height if advance is None else advance)

    def all_lines(self) -> List[str]:
        return [line.text for page in self.pages for line in page]


def wrap_text(text: str, font: Font, width: float) -> List[str]:
    """Split text into lines no wider than width (mm) in the given font."""
    font_name, font_size = font
    return simpleSplit(text, font_name, font_size, width * mm) or [""]


class ExportEngine:
    """Render the accepted question subset to text and PDF."""

    def __init__(
        self,
        page_width: float = config.PDF_PAGE_WIDTH,
        page_height: float = config.PDF_PAGE_HEIGHT,
        margin: float = config.PDF_MARGIN,
        title: str = config.PDF_TITLE
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.title = title

    def render_text(self, questions: Sequence[GeneratedQuestion]) -> str:
        return render_text(questions)

    def layout(self, questions: Sequence[GeneratedQuestion]) -> DocumentLayout:
        """Compute the paginated layout for a list of questions."""
        doc = DocumentLayout(self.page_width, self.page_height, self.margin)
        width = doc.content_width

        doc.place_block(
            [self.title],
            self.page_width / 2,
            config.PDF_TITLE_FONT,
            line_height=config.PDF_TITLE_SPACING,
            needed=config.PDF_TITLE_HEIGHT,
            centered=True,
        )

        for number, question in enumerate(questions, 1):
            suffix = " (True/False)" if question.question_type == QuestionType.TRUE_FALSE else ""
            doc.place_block(
                wrap_text(f"{number}. {question.text}{suffix}", config.PDF_QUESTION_FONT, width),
                self.margin,
                config.PDF_QUESTION_FONT,
                config.PDF_QUESTION_LINE_HEIGHT,
            )

            if question.question_type == QuestionType.MCQ and question.options is not None:
                doc.advance(config.PDF_OPTIONS_SPACING)
                for i, option in enumerate(question.options):
                    doc.place_block(
                        wrap_text(
                            f"{option_letter(i)}) {option}",
                            config.PDF_OPTION_FONT,
                            width - config.PDF_OPTION_INDENT,
                        ),
                        self.margin + config.PDF_OPTION_INDENT,
                        config.PDF_OPTION_FONT,
                        config.PDF_OPTION_LINE_HEIGHT,
                    )

            label = answer_label(question)
            if label is not None:
                doc.advance(config.PDF_ANSWER_SPACING)
                doc.place_block(
                    wrap_text(
                        f"Answer: {label}",
                        config.PDF_ANSWER_FONT,
                        width - config.PDF_ANSWER_WRAP_INSET,
                    ),
                    self.margin + config.PDF_ANSWER_INDENT,
                    config.PDF_ANSWER_FONT,
                    config.PDF_ANSWER_LINE_HEIGHT,
                )

            doc.advance(config.PDF_QUESTION_SPACING)

        return doc

    def render_pdf(
        self,
        questions: Sequence[GeneratedQuestion],
        output: Union[str, Path, BinaryIO]
    ) -> DocumentLayout:
        """
        Draw the paginated layout to a PDF file or binary stream.

        Returns:
            The layout that was drawn
        """
        doc = self.layout(questions)
        target = str(output) if isinstance(output, (str, Path)) else output

        pdf = canvas.Canvas(target, pagesize=(self.page_width * mm, self.page_height * mm))
        pdf.setTitle(self.title)
        for page in doc.pages:
            for line in page:
                font_name, font_size = line.font
                pdf.setFont(font_name, font_size)
                y = (self.page_height - line.y) * mm
                if line.centered:
                    pdf.drawCentredString(line.x * mm, y, line.text)
                else:
                    pdf.drawString(line.x * mm, y, line.text)
            pdf.showPage()
        pdf.save()

        logger.info("Rendered %d question(s) on %d page(s)", len(questions), doc.page_count)
        return doc

    def render_pdf_bytes(self, questions: Sequence[GeneratedQuestion]) -> bytes:
        buffer = BytesIO()
        self.render_pdf(questions, buffer)
        return buffer.getvalue()

    def save_text(
        self,
        questions: Sequence[GeneratedQuestion],
        output_file: Optional[Union[str, Path]] = None
    ) -> Path:
        """
        Save the text export to a file.

        Args:
            questions: Accepted questions in id order
            output_file: Output file path (defaults to output/bloomsphere-questions.txt)
        """
        if output_file is None:
            output_file = Path(config.OUTPUT_DIR) / config.TEXT_EXPORT_FILE

        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render_text(questions), encoding="utf-8")
        return output_path

    def save_pdf(
        self,
        questions: Sequence[GeneratedQuestion],
        output_file: Optional[Union[str, Path]] = None
    ) -> Path:
        """Save the PDF export (defaults to output/bloomsphere-questions.pdf)."""
        if output_file is None:
            output_file = Path(config.OUTPUT_DIR) / config.PDF_EXPORT_FILE

        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.render_pdf(questions, output_path)
        return output_path
