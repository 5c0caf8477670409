"""Restricted markdown to HTML conversion.

Applies a fixed sequence of pattern-based stages to raw document text.
Each stage maps text to text and feeds the next one. Block-level output
(code blocks, lists) is stashed in a per-call list and replaced by an
opaque placeholder so later stages never re-interpret it and paragraph
wrapping never encloses it.

Recognized constructs: fenced code blocks, ``#``/``##``/``###`` headings,
``**bold**``, ``*italic*``, inline code, ``-`` lists and numbered lists.
Anything else is left as (escaped) text.
"""

import re
from collections.abc import Callable

# Stage signature: (text, stashed blocks) -> text
Stage = Callable[[str, list[str]], str]

_PLACEHOLDER = "\x00{index}\x00"
_PLACEHOLDER_RE = re.compile(r"\x00(\d+)\x00")

# An unterminated fence runs to the end of the document
_FENCE_RE = re.compile(r"```(.*?)(?:```|\Z)", re.DOTALL)

_HEADING_RES = (
    (re.compile(r"^### (.*)$", re.MULTILINE), r"<h3>\1</h3>"),
    (re.compile(r"^## (.*)$", re.MULTILINE), r"<h2>\1</h2>"),
    (re.compile(r"^# (.*)$", re.MULTILINE), r"<h1>\1</h1>"),
)
_HEADING_LINE_RE = re.compile(r"<h([1-3])>.*</h\1>")
_TITLE_RE = re.compile(r"^# (.*)$", re.MULTILINE)

_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_ITALIC_RE = re.compile(r"\*(.*?)\*")
_INLINE_CODE_RE = re.compile(r"`([^`]+)`")

_UNORDERED_ITEM_RE = re.compile(r"^[ \t]*- (.*)$")
_ORDERED_ITEM_RE = re.compile(r"^[ \t]*(\d+)\. (.*)$")

_PARAGRAPH_BREAK_RE = re.compile(r"\n{2,}")


def _stash(blocks: list[str], html: str) -> str:
    """Store finished block HTML and return its placeholder on its own chunk."""
    blocks.append(html)
    return "\n\n" + _PLACEHOLDER.format(index=len(blocks) - 1) + "\n\n"


def _normalize(text: str, blocks: list[str]) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    # NUL is reserved for placeholders
    return text.replace("\x00", "\ufffd")


def _escape_html(text: str, blocks: list[str]) -> str:
    return text.replace("<", "&lt;").replace(">", "&gt;")


def _fenced_code(text: str, blocks: list[str]) -> str:
    return _FENCE_RE.sub(
        lambda m: _stash(blocks, f"<pre><code>{m.group(1)}</code></pre>"),
        text,
    )


def _headings(text: str, blocks: list[str]) -> str:
    for pattern, replacement in _HEADING_RES:
        text = pattern.sub(replacement, text)
    return text


def _bold(text: str, blocks: list[str]) -> str:
    return _BOLD_RE.sub(r"<strong>\1</strong>", text)


def _italic(text: str, blocks: list[str]) -> str:
    return _ITALIC_RE.sub(r"<em>\1</em>", text)


def _inline_code(text: str, blocks: list[str]) -> str:
    return _INLINE_CODE_RE.sub(r"<code>\1</code>", text)


def _collect_runs(
    text: str,
    blocks: list[str],
    pattern: re.Pattern[str],
    build: Callable[[list[re.Match[str]]], str],
) -> str:
    """Replace each run of consecutive lines matching pattern with one block."""
    output: list[str] = []
    run: list[re.Match[str]] = []

    for line in text.split("\n"):
        match = pattern.match(line)
        if match is not None:
            run.append(match)
            continue
        if run:
            output.append(_stash(blocks, build(run)))
            run = []
        output.append(line)

    if run:
        output.append(_stash(blocks, build(run)))

    return "\n".join(output)


def _unordered_lists(text: str, blocks: list[str]) -> str:
    def build(run: list[re.Match[str]]) -> str:
        items = "".join(f"<li>{m.group(1)}</li>" for m in run)
        return f"<ul>{items}</ul>"

    return _collect_runs(text, blocks, _UNORDERED_ITEM_RE, build)


def _ordered_lists(text: str, blocks: list[str]) -> str:
    def build(run: list[re.Match[str]]) -> str:
        items = "".join(f'<li value="{m.group(1)}">{m.group(2)}</li>' for m in run)
        return f"<ol>{items}</ol>"

    return _collect_runs(text, blocks, _ORDERED_ITEM_RE, build)


def _paragraphs(text: str, blocks: list[str]) -> str:
    """Wrap text chunks in paragraphs.

    Chunks are separated by blank lines. A chunk holding only a placeholder
    is emitted bare, and heading lines are split out of their chunk so they
    are never wrapped either. Blank chunks are dropped; a document with
    nothing but blank chunks becomes one empty paragraph.
    """
    chunks = [chunk.strip("\n") for chunk in _PARAGRAPH_BREAK_RE.split(text)]
    kept = [chunk for chunk in chunks if chunk.strip()]
    if not kept:
        return "<p></p>"
    return "".join(_wrap_chunk(chunk) for chunk in kept)


def _wrap_chunk(chunk: str) -> str:
    if _PLACEHOLDER_RE.fullmatch(chunk.strip()):
        return chunk.strip()

    parts: list[str] = []
    pending: list[str] = []
    lines = chunk.split("\n")
    if not any(_HEADING_LINE_RE.fullmatch(line) for line in lines):
        return f"<p>{chunk}</p>"

    for line in lines:
        if _HEADING_LINE_RE.fullmatch(line):
            if pending:
                parts.append(_paragraph("\n".join(pending)))
                pending = []
            parts.append(line)
        else:
            pending.append(line)
    if pending:
        parts.append(_paragraph("\n".join(pending)))

    return "".join(parts)


def _paragraph(text: str) -> str:
    return f"<p>{text}</p>" if text.strip() else ""


def _restore_blocks(text: str, blocks: list[str]) -> str:
    return _PLACEHOLDER_RE.sub(lambda m: blocks[int(m.group(1))], text)


PIPELINE: tuple[Stage, ...] = (
    _normalize,
    _escape_html,
    _fenced_code,
    _headings,
    _bold,
    _italic,
    _inline_code,
    _unordered_lists,
    _ordered_lists,
    _paragraphs,
    _restore_blocks,
)


def render_markdown(text: str) -> str:
    """Convert document text to an HTML fragment.

    Never raises on malformed input: unmatched delimiters stay literal and
    ambiguous constructs are resolved by stage order.

    Args:
        text: Raw document text

    Returns:
        HTML fragment ready to be assigned to a container's markup
    """
    blocks: list[str] = []
    for stage in PIPELINE:
        text = stage(text, blocks)
    return text


def extract_title(text: str) -> str | None:
    """Return the text of the first level-1 heading, if any.

    Args:
        text: Raw document text

    Returns:
        Heading text with surrounding whitespace stripped, or None
    """
    text = _normalize(text, [])
    match = _TITLE_RE.search(_FENCE_RE.sub("", text))
    if match is None:
        return None
    return match.group(1).strip() or None
