"""
Constants, word lists and scoring weights for content-safety-pipeline.

Every table here is part of the observable behaviour of the pipeline; changing
an entry changes which inputs are flagged.
"""

# Version information
__version__ = "1.0.0"

# ---------------------------------------------------------------------------
# Sanitizer
# ---------------------------------------------------------------------------

# Entity table decoded before tag stripping so encoded attacks are revealed
HTML_ENTITIES = {
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&apos;": "'",
    "&amp;": "&",
    "&#60;": "<",
    "&#62;": ">",
    "&#34;": '"',
    "&#39;": "'",
    "&#38;": "&",
    "&#x3c;": "<",
    "&#x3e;": ">",
    "&#x22;": '"',
    "&#x27;": "'",
    "&#x26;": "&",
}

DANGEROUS_TAGS = [
    # Script and execution tags
    "<script", "</script>",
    "<iframe", "</iframe>",
    "<object", "</object>",
    "<embed", "</embed>",
    "<applet", "</applet>",
    # SVG and MathML vectors
    "<svg", "</svg>",
    "<math", "</math>",
    "<foreignobject",
    # Image and media tags
    "<img", "<image",
    "<video", "</video>",
    "<audio", "</audio>",
    "<source",
    # Form and input tags
    "<form", "</form>",
    "<input", "<textarea", "</textarea>",
    "<button", "</button>",
    "<select", "</select>",
    # Link and style tags
    "<link",
    "<style", "</style>",
    "<meta",
    "<base",
    # Structural tags
    "<frame", "</frame>",
    "<frameset", "</frameset>",
    "<body", "</body>",
    "<html", "</html>",
    "<head", "</head>",
]

EVENT_HANDLERS = [
    # Mouse
    "onclick=", "ondblclick=", "onmousedown=", "onmouseup=",
    "onmouseover=", "onmouseout=", "onmousemove=", "onmouseenter=", "onmouseleave=",
    # Keyboard
    "onkeydown=", "onkeyup=", "onkeypress=",
    # Form
    "onsubmit=", "onreset=", "onchange=", "oninput=", "oninvalid=",
    "onfocus=", "onblur=", "onfocusin=", "onfocusout=",
    # Load / unload
    "onload=", "onunload=", "onbeforeunload=",
    "onerror=", "onabort=",
    # Media
    "onplay=", "onpause=", "onended=", "onvolumechange=",
    "ontimeupdate=", "oncanplay=", "oncanplaythrough=",
    # Drag
    "ondrag=", "ondrop=", "ondragstart=", "ondragend=",
    "ondragover=", "ondragenter=", "ondragleave=",
    # Clipboard
    "oncopy=", "oncut=", "onpaste=",
    # Animation and transition
    "onanimationstart=", "onanimationend=", "onanimationiteration=",
    "ontransitionend=",
    # Other
    "onscroll=", "onresize=", "onwheel=",
    "oncontextmenu=", "onsearch=", "ontoggle=",
    "onshow=", "onpointerdown=", "onpointerup=",
]

DANGEROUS_SCHEMES = ["javascript:", "vbscript:", "data:"]

# Matched case-insensitively, like the tag, handler and scheme lists
RESIDUAL_ATTACK_FRAGMENTS = [
    "expression(",  # CSS expression()
    "@import",
    "&#",  # entity prefix that never completed an entity
    "\\x",  # hex escape prefix
    "\\u",  # unicode escape prefix
    "eval(",
    "fromcharcode",
    "alert(",
    "document.",
    "window.",
    "location.",
    "cookie",
    "innerHTML",
    "outerHTML",
]

STRICT_FORBIDDEN_CHARS = "<>{}[]|\\^`\"'"

# URL query-allowed punctuation (alphanumerics are always kept)
URL_QUERY_SAFE_CHARS = "-._~!$&'()*+,;=:@/?"

ALLOWED_URL_SCHEMES = {"http", "https"}

# ---------------------------------------------------------------------------
# Content moderation
# ---------------------------------------------------------------------------

PROFANITY_WORDS = frozenset(
    {
        "damn", "hell", "crap", "shit", "fuck", "bitch", "ass", "bastard",
        "dick", "cock", "pussy", "slut", "whore", "fag", "nigger", "cunt",
        "asshole", "bullshit", "motherfucker", "fucker", "dumbass", "jackass",
        "prick", "douche", "twat", "wanker", "tosser", "bollocks",
    }
)

# Substrings rejected in display names (tested against the space-stripped name)
INAPPROPRIATE_NAME_TERMS = frozenset(
    {
        # Sexual terms
        "sexy", "sexyy", "sexxy", "sexii", "horny", "hornyy", "hornii",
        "nude", "nudes", "naked", "xxx", "porn", "porno", "pornstar",
        "onlyfans", "escort", "hooker", "stripper", "camgirl", "camboy",
        "hotgirl", "hotboy", "hotbabe", "sexygirl", "sexyboy", "sexybabe",
        "bigdick", "bigcock", "bigboobs", "bigtits", "bigass", "thicc",
        "dtf", "hookup", "fuckbuddy", "fwb", "nsa", "ons",
        "blowjob", "handjob", "deepthroat", "anal", "oral", "cumshot",
        "milf", "dilf", "gilf", "daddy", "mommy", "sugar",
        "booty", "boobies", "titties", "nipples", "vagina", "penis",
        "erotic", "kinky", "fetish", "bdsm", "bondage", "dominatrix",
        "mistress", "master", "slave", "submissive", "dominant",
        # Scam related
        "bitcoin", "crypto", "investment", "forex", "trading",
        "rich", "wealthy", "millionaire", "billionaire",
        "cashapp", "venmo", "paypal", "zelle", "moneygram",
        # Fake identity signals
        "realme", "notfake", "notabot", "realaccount", "verified100",
        "model", "supermodel", "influencer", "celebrity",
        # Drugs
        "weed", "marijuana", "cocaine", "heroin", "meth", "drugs",
        "dealer", "plug", "420", "blaze",
    }
)

SPAM_PATTERNS = [
    # URLs and links
    "http://", "https://", "www.", ".com", ".net", ".org",
    # Social media handles
    "@", "snapchat", "instagram", "telegram", "whatsapp",
    # Money
    "bitcoin", "crypto", "investment", "money transfer",
    "$$$", "cash app", "venmo", "paypal",
    # Canned phrases
    "click here", "buy now", "limited time", "act now",
]

SPAM_EMOJI_THRESHOLD = 10

LEET_SUBSTITUTIONS = {
    "0": "o",
    "1": "i",
    "3": "e",
    "4": "a",
    "5": "s",
    "7": "t",
    "$": "s",
    "@": "a",
    "€": "e",
}

PII_PATTERNS = {
    "phone": r"\b\d{3}[-.]?\d{3}[-.]?\d{4}\b",
    "email": r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b",
    "address": (
        r"\b\d+\s+[A-Za-z\s]+"
        r"(?:Street|St|Avenue|Ave|Road|Rd|Drive|Dr|Lane|Ln|Boulevard|Blvd)\b"
    ),
}

REPETITION_PATTERN = r"(.)\1{4,}"

CAPS_RATIO_THRESHOLD = 0.7
CAPS_MIN_LETTERS = 10

MAX_CONTENT_SCORE = 100
VIOLATION_DEDUCTIONS = {
    "profanity": 40,
    "spam": 30,
    "personal_info": 20,
    "excessive_caps": 10,
    "excessive_repetition": 10,
}

# Display name rules
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50
NAME_MAX_DIGITS = 7
NAME_SPECIAL_CHAR_RATIO = 0.3
NAME_CONTACT_MARKERS = ["@", ".com", ".net"]

# ---------------------------------------------------------------------------
# Fake profile analysis
# ---------------------------------------------------------------------------

SUSPICION_THRESHOLD = 0.7
# Sub-score sum is divided by this regardless of which checks applied
SCORE_NORMALIZER = 4.0

PROFESSIONAL_PHOTO_PIXELS = 4000 * 3000
FACE_CONSISTENCY_THRESHOLD = 0.5
HIGH_QUALITY_THRESHOLD = 0.95
DEFAULT_FACE_CONSISTENCY = 0.85
DEFAULT_IMAGE_QUALITY = 0.75

INDICATOR_WEIGHTS = {
    # Photos
    "no_photos": 0.8,
    "single_photo": 0.4,
    "stock_photo": 0.6,
    "professional_photo": 0.3,
    "inconsistent_faces": 0.7,
    "suspiciously_high_quality": 0.2,
    # Bio
    "empty_bio": 0.6,
    "short_bio": 0.3,
    "generic_bio": 0.5,
    "contains_external_links": 0.4,
    "contains_payment_info": 0.8,
    "excessive_emojis": 0.4,
    "bot_like_text": 0.7,
    # Name
    "single_name": 0.2,
    "suspicious_name": 0.6,
    "unusual_name_format": 0.3,
    "name_contains_numbers": 0.4,
    "suspicious_keywords": 0.9,
    # Completeness
    "incomplete_profile": 0.5,
}

SHORT_BIO_LENGTH = 20
GENERIC_BIO_MIN_PHRASES = 3
GENERIC_BIO_PHRASES = [
    "love to laugh",
    "live laugh love",
    "looking for fun",
    "just ask",
    "new to this",
    "swipe right",
    "no drama",
]
BIO_LINK_PATTERNS = ["instagram", "snapchat", "kik", "whatsapp", "@", "http"]
BIO_PAYMENT_KEYWORDS = ["cashapp", "venmo", "paypal", "donate", "support", "subscribe"]
BOT_SPECIAL_CHARS = "!@#$%^&*()"
BOT_SPECIAL_CHAR_RATIO = 0.3

NAME_MIN_CHARS = 2
SUSPICIOUS_NAME_KEYWORDS = ["fake", "test", "bot", "scam", "spam"]

INCOMPLETE_PROFILE_MIN_MISSING = 2

# Behaviour thresholds
SECONDS_PER_DAY = 86400
BEHAVIOR_WEIGHTS = {
    "mass_messaging": 0.7,
    "new_account_high_activity": 0.8,
    "no_engagement": 0.6,
    "rapid_matching": 0.5,
}
MASS_MESSAGING_MIN_SENT = 100
MASS_MESSAGING_MAX_MATCHES = 10
NEW_ACCOUNT_MAX_DAYS = 1
NEW_ACCOUNT_MIN_SENT = 50
NO_ENGAGEMENT_MIN_SENT = 20
RAPID_MATCHING_MIN_MATCHES = 100
RAPID_MATCHING_MAX_DAYS = 7

# ---------------------------------------------------------------------------
# Files, performance and logging
# ---------------------------------------------------------------------------

SUPPORTED_TEXT_EXTENSIONS = {".txt", ".md", ".html", ".htm", ".json", ".csv"}
SUPPORTED_PROFILE_EXTENSIONS = {".yml", ".yaml"}
SUPPORTED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".heic"}

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
MAX_TEXT_LENGTH = 1_000_000

# Photo fan-out
MAX_WORKERS = 4
PLUGIN_TIMEOUT_SECONDS = 5.0

# Defaults for the acceptance flows
DEFAULT_SANITIZATION_LEVEL = "standard"
DEFAULT_MIN_BIO_SCORE = 70

CONFIG_FILE_NAMES = [
    "content-safety.yml",
    "content-safety.yaml",
    "config.yml",
    "config.yaml",
]

LOG_FORMAT = (
    "%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"
)
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
