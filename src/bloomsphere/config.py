"""
Configuration file for the BloomSphere client.

Modify these values to customize endpoints, upload limits and export layout.
"""

# Remote Service Configuration
API_BASE_URL = "https://bloomflask-production.up.railway.app"
SCORE_ENDPOINT = "/analysequestion"
GENERATE_ENDPOINT = "/generatequestion"
REQUEST_TIMEOUT_SECONDS = 120.0

# Environment variables that override the values above
API_URL_ENV_VAR = "BLOOMSPHERE_API_URL"
TIMEOUT_ENV_VAR = "BLOOMSPHERE_TIMEOUT"

# Upload Constraints
MAX_FILE_SIZE_MB = 10
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024
GENERATION_MIME_TYPES = ["application/pdf"]
GENERATION_FILE_DESCRIPTION = "PDF"
SCORING_MIME_TYPES = ["application/pdf", "image/png", "image/jpeg"]
SCORING_FILE_DESCRIPTION = "PDF, PNG, or JPG"

# Question Generation Settings
QUESTION_LENGTHS = ("Short", "Medium", "Long")
DEFAULT_QUESTION_LENGTH = "Medium"
DEFAULT_NUM_QUESTIONS = {"text": 5, "trueFalse": 0, "mcq": 0}
MAX_QUESTIONS_PER_TYPE = 10

# Bloom's Taxonomy Weights (UI sliders range from 0 to 100)
MIN_WEIGHT = 0
MAX_WEIGHT = 100
DEFAULT_WEIGHTS = {
    "Remembering": 20,
    "Understanding": 20,
    "Applying": 20,
    "Analyzing": 20,
    "Evaluating": 10,
    "Creating": 10,
}
WEIGHT_PRESETS = {
    "balanced": {
        "Remembering": 17,
        "Understanding": 17,
        "Applying": 17,
        "Analyzing": 17,
        "Evaluating": 16,
        "Creating": 16,
    },
    "high-order": {
        "Remembering": 10,
        "Understanding": 10,
        "Applying": 15,
        "Analyzing": 25,
        "Evaluating": 25,
        "Creating": 15,
    },
    "recall": {
        "Remembering": 30,
        "Understanding": 30,
        "Applying": 15,
        "Analyzing": 10,
        "Evaluating": 10,
        "Creating": 5,
    },
}

# Score Visualisation
MIN_VISIBLE_PERCENTAGE = 0.1
MIN_LABELLED_PERCENTAGE = 8

# Output Configuration
OUTPUT_DIR = "output"
TEXT_EXPORT_FILE = "bloomsphere-questions.txt"
PDF_EXPORT_FILE = "bloomsphere-questions.pdf"

# Paginated Export Layout (millimetres, A4 portrait)
PDF_TITLE = "BloomSphere Generated Questions"
PDF_PAGE_WIDTH = 210.0
PDF_PAGE_HEIGHT = 297.0
PDF_MARGIN = 15.0
PDF_TITLE_FONT = ("Helvetica-Bold", 18)
PDF_TITLE_HEIGHT = 20.0
PDF_TITLE_SPACING = 15.0
PDF_QUESTION_FONT = ("Helvetica", 12)
PDF_QUESTION_LINE_HEIGHT = 7.0
PDF_OPTION_FONT = ("Courier", 12)
PDF_OPTION_INDENT = 8.0
PDF_OPTION_LINE_HEIGHT = 7.0
PDF_OPTIONS_SPACING = 2.0
PDF_ANSWER_FONT = ("Helvetica-Bold", 11)
PDF_ANSWER_INDENT = 4.0
# Answers wrap as narrow as options even though they are drawn less indented
PDF_ANSWER_WRAP_INSET = PDF_OPTION_INDENT
PDF_ANSWER_LINE_HEIGHT = 6.0
PDF_ANSWER_SPACING = 3.0
PDF_QUESTION_SPACING = 10.0
