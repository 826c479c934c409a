import re

# Order matters: general brackets go first so the narrower forms only see what is left.
SUBSTITUTIONS = [
    # [290ED/6/6/4], [完美] ... but never the [ETH] marker
    (re.compile(r"\[(?!ETH\])[^\[\]\n]*\]"), ""),
    # (15-20), (290/6/6) variable-roll ranges
    (re.compile(r"\(\s*\d+(?:\s*[-~/]\s*\d+)+\s*\)"), ""),
    (re.compile(r"【[^】\n]*】|「[^」\n]*」"), ""),
    (re.compile(r"^[ \t]*(?:suffix|prefix)[ \t]*[:：].*$", re.IGNORECASE | re.MULTILINE), ""),
    (re.compile(r"[ \t]+$", re.MULTILINE), ""),
    (re.compile(r"\n\s*\n+"), "\n"),
]

LEVEL_REQUIREMENT = re.compile(r"需要等级|等级需求|Required\s+Level", re.IGNORECASE)
HEADER_LINES = 3


def preprocess_ocr_text(text: str) -> str:
    """
    Clean OCR output of an item tooltip before it goes into the appraisal prompt.

    Decorative annotations are dropped. When a level requirement line is present,
    only the item header (at most three lines) and the lines from the requirement
    onward are kept.
    """
    cleaned = text or ""
    for pattern, replacement in SUBSTITUTIONS:
        cleaned = pattern.sub(replacement, cleaned)
    cleaned = cleaned.strip()

    lines = cleaned.split("\n")
    for index, line in enumerate(lines):
        if LEVEL_REQUIREMENT.search(line):
            return "\n".join(lines[:min(HEADER_LINES, index)] + lines[index:])
    return cleaned
