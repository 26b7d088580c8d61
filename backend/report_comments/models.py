from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_TOPICS = 10
DEFAULT_FIRST_NAME = "Student"


def _clean_str(value: Any) -> str:
	if value is None:
		return ""
	# Render scalars the way they read in the JSON body
	if isinstance(value, bool):
		return "true" if value else "false"
	if isinstance(value, float) and value.is_integer():
		value = int(value)
	return str(value).strip()


def _clean_topics(value: Any) -> List[str]:
	if not isinstance(value, list):
		return []
	cleaned = [_clean_str(v) for v in value]
	return [v for v in cleaned if v][:MAX_TOPICS]


class CommentRequest(BaseModel):
	"""Sanitized student data; construction never fails on malformed input."""

	model_config = ConfigDict(populate_by_name=True)

	student_first_name: str = Field(default=DEFAULT_FIRST_NAME, alias="studentFirstName")
	strength_topics: List[str] = Field(default_factory=list, alias="strengthTopics")
	developing_topics: List[str] = Field(default_factory=list, alias="developingTopics")
	focus_topics: List[str] = Field(default_factory=list, alias="focusTopics")

	@field_validator("student_first_name", mode="before")
	@classmethod
	def _name(cls, v: Any) -> str:
		# false, 0 and "" all fall back to the default
		if not v:
			return DEFAULT_FIRST_NAME
		return _clean_str(v) or DEFAULT_FIRST_NAME

	@field_validator("strength_topics", "developing_topics", "focus_topics", mode="before")
	@classmethod
	def _topics(cls, v: Any) -> List[str]:
		return _clean_topics(v)

	@classmethod
	def from_payload(cls, body: Any) -> "CommentRequest":
		if not isinstance(body, dict):
			body = {}
		fields = ("studentFirstName", "strengthTopics", "developingTopics", "focusTopics")
		# Run every field through the validators, including absent ones
		return cls.model_validate({k: body.get(k) for k in fields})

	def prompt_payload(self) -> dict[str, Any]:
		return self.model_dump(by_alias=True)


class CommentResponse(BaseModel):
	comment: str
	model: str


class ModelListResponse(BaseModel):
	models: List[str]
	note: str


@dataclass(frozen=True)
class UpstreamFailure:
	model: str
	status_code: int
	data: Any


@dataclass(frozen=True)
class GenerationSuccess:
	model: str
	text: str


@dataclass(frozen=True)
class AllCandidatesFailed:
	last_error: UpstreamFailure
	attempted: List[str] = field(default_factory=list)


GenerationResult = Union[GenerationSuccess, AllCandidatesFailed]
