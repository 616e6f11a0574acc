"""
Recover structured data from loosely formatted model replies.

Both extractors run the same pipeline:

1. strip a surrounding code fence and parse the whole reply as JSON
2. scan the raw reply for bracket-balanced spans and parse each in turn,
   finishing with the greedy first-open to last-close span

The scan is a heuristic, not a parser. Replies that defeat it produce an
empty list or None, never an exception.

"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Iterator
from typing import Any, TypeVar

from pydantic import BaseModel

logger = logging.getLogger(__name__)

T = TypeVar("T")

_FENCE_START = re.compile(r"^\s*```(?:json)?[ \t]*\n?", re.IGNORECASE)
_FENCE_END = re.compile(r"\n?[ \t]*```\s*$")


class CommitMessage(BaseModel):
	"""One commit message suggestion."""

	message: str


class PullRequestDraft(BaseModel):
	"""Title and body for a pull request."""

	title: str
	body: str


def strip_code_fence(text: str) -> str:
	"""Remove a leading ```` ```json ```` (or bare ```` ``` ````) fence and a trailing fence."""
	text = _FENCE_START.sub("", text, count=1)
	text = _FENCE_END.sub("", text, count=1)
	return text.strip()


def _matched_pairs(text: str, open_char: str, close_char: str) -> list[tuple[int, int]]:
	"""
	Index pairs of matched brackets, sorted by the opening index.

	A single pass with a stack of open indices. Quotes only open a JSON string
	inside a bracket, so stray quotes in surrounding prose are ignored.
	Closing brackets with nothing open are skipped.

	"""
	pairs: list[tuple[int, int]] = []
	stack: list[int] = []
	in_string = False
	escaped = False
	for i, char in enumerate(text):
		if in_string:
			if escaped:
				escaped = False
			elif char == "\\":
				escaped = True
			elif char == '"':
				in_string = False
			continue
		if char == '"' and stack:
			in_string = True
		elif char == open_char:
			stack.append(i)
		elif char == close_char and stack:
			pairs.append((stack.pop(), i))
	pairs.sort()
	return pairs


def iter_balanced_spans(text: str, open_char: str, close_char: str) -> Iterator[str]:
	"""
	Yield candidate spans, outermost first, in order of their opening bracket.

	Every balanced span is yielded, nested ones included, so an array wrapped
	in prose that itself contains brackets can still be found. The greedy span
	from the first opening bracket to the last closing bracket comes last.

	"""
	pairs = _matched_pairs(text, open_char, close_char)
	for start, end in pairs:
		yield text[start : end + 1]

	first = text.find(open_char)
	last = text.rfind(close_char)
	if first != -1 and last > first and (first, last) not in set(pairs):
		yield text[first : last + 1]


def find_balanced_span(text: str, open_char: str, close_char: str) -> str | None:
	"""Return the first candidate span from :func:`iter_balanced_spans`, if any."""
	return next(iter_balanced_spans(text, open_char, close_char), None)


def _recover(
	text: str,
	open_char: str,
	close_char: str,
	convert: Callable[[Any], T | None],
) -> tuple[T | None, Exception | None]:
	"""Run the two-stage pipeline, returning the first converted value and the first parse error."""
	first_error: Exception | None = None
	try:
		value = convert(json.loads(strip_code_fence(text)))
		if value is not None:
			return value, None
		first_error = ValueError("reply does not have the expected shape")
	except (ValueError, RecursionError) as e:
		first_error = e

	for span in iter_balanced_spans(text, open_char, close_char):
		try:
			value = convert(json.loads(span))
		except (ValueError, RecursionError):
			continue
		if value is not None:
			logger.debug("Recovered JSON from a bracketed span in the reply")
			return value, None
	return None, first_error


def _to_commit_messages(data: Any, limit: int) -> list[CommitMessage] | None:  # noqa: ANN401
	if not isinstance(data, list):
		return None
	if not all(isinstance(item, dict) and isinstance(item.get("message"), str) and item["message"] for item in data):
		return None
	return [CommitMessage(message=item["message"]) for item in data[: max(limit, 0)]]


def _to_pr_draft(data: Any) -> PullRequestDraft | None:  # noqa: ANN401
	if not isinstance(data, dict):
		return None
	title = data.get("title")
	body = data.get("body")
	if not (isinstance(title, str) and title and isinstance(body, str) and body):
		return None
	return PullRequestDraft(title=title, body=body)


def extract_commit_messages(text: str, limit: int) -> list[CommitMessage]:
	"""
	Recover a list of ``{"message": ...}`` objects from a model reply.

	Args:
	    text: Raw reply text
	    limit: Maximum number of messages to return

	Returns:
	    Up to ``limit`` messages, or an empty list when nothing usable was found

	"""
	messages, error = _recover(text, "[", "]", lambda data: _to_commit_messages(data, limit))
	if messages is None:
		logger.error("Failed to parse LLM response as JSON. Raw response was: %s", text)
		logger.error("Error: %s", error)
		return []
	return messages


def extract_pr_json(text: str) -> PullRequestDraft | None:
	"""
	Recover a ``{"title": ..., "body": ...}`` object from a model reply.

	Args:
	    text: Raw reply text

	Returns:
	    The draft, or None when no usable object was found

	"""
	draft, error = _recover(text, "{", "}", _to_pr_draft)
	if draft is None:
		logger.error("Failed to parse PR JSON from LLM: %s", error)
		logger.debug("Returned content: %s", text)
	return draft
