from __future__ import annotations
import json
import re
from typing import Any, Callable, List, Optional

from .models import CommentRequest

_DIGITS = re.compile(r"[0-9]")


def build_prompt(req: CommentRequest) -> str:
	rules = [
		"You write short school report comments for a teacher.",
		"Rules:",
		"- Do NOT include numbers, percentages, marks, grades, or scores.",
		"- Mention the student's first name exactly once.",
		"- Use a professional supportive tone.",
		"- Keep it 2–4 sentences.",
	]
	if not req.focus_topics:
		rules.append("- There are no focus topics: praise strengths and encourage continued effort.")
	else:
		rules.append(
			"- Praise strengths first, then present the focus topics as the next steps to work on."
		)
	return (
		"\n".join(rules)
		+ "\n\n"
		+ f"Student data:\n{json.dumps(req.prompt_payload(), ensure_ascii=False)}\n\n"
		+ "Write the comment now."
	)


def strip_digits(text: Optional[str]) -> str:
	return _DIGITS.sub("", text or "").strip()


# ---- Response extraction ----

def _gemini_text(data: Any) -> str:
	candidates = data.get("candidates") if isinstance(data, dict) else None
	if not isinstance(candidates, list):
		return ""
	for cand in candidates:
		content = cand.get("content") if isinstance(cand, dict) else None
		parts = content.get("parts") if isinstance(content, dict) else None
		if not isinstance(parts, list):
			continue
		text = "".join(p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str))
		if text:
			return text
	return ""


def _output_text(data: Any) -> str:
	if not isinstance(data, dict):
		return ""
	direct = data.get("output_text")
	if isinstance(direct, str) and direct:
		return direct
	if isinstance(direct, list):
		joined = "".join(t for t in direct if isinstance(t, str))
		if joined:
			return joined
	output = data.get("output")
	if not isinstance(output, list):
		return ""
	fragments: List[str] = []
	for item in output:
		content = item.get("content") if isinstance(item, dict) else None
		if not isinstance(content, list):
			continue
		for piece in content:
			if isinstance(piece, dict) and isinstance(piece.get("text"), str):
				fragments.append(piece["text"])
	return "".join(fragments)


EXTRACTORS: List[Callable[[Any], str]] = [_gemini_text, _output_text]


def extract_text(data: Any) -> str:
	"""Return the generated text from a provider response, or "" when none is found."""
	for extractor in EXTRACTORS:
		text = extractor(data)
		if text:
			return text
	return ""
