"""
Structured schemas for question-set definitions.

Raw question definitions come from JSON written by hand over several iterations,
so two naming schemes coexist (``routeKeywords`` / ``routing``,
``systemReplyOnLowKnowledge`` / ``lowKnowledgeReply`` and so on). The pydantic
model accepts both and converts to a single immutable ``QuestionNode``.
"""
import logging
from typing import Optional, Dict, Any, List, Union

from pydantic import BaseModel, ConfigDict, Field, AliasChoices, ValidationError, field_validator, model_validator

from .models import QuestionNode, DefaultNext
from ..errors import QuestionDefinitionError

logger = logging.getLogger("question_schema")


class QuestionDefinition(BaseModel):
    """Validated form of a single question definition."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: int
    question: str = Field(validation_alias=AliasChoices("question", "prompt", "text"))
    keywords: List[str] = Field(default_factory=list)
    expected_answers: Optional[List[str]] = Field(
        default=None, validation_alias=AliasChoices("expectedAnswers", "expected_answers")
    )
    expected_summary: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("expectedAnswer", "expectedSummary", "expected_summary")
    )
    expected_content: Optional[Union[List[str], str]] = Field(
        default=None, validation_alias=AliasChoices("expectedContent", "expected_content")
    )
    route_keywords: Dict[str, int] = Field(
        default_factory=dict, validation_alias=AliasChoices("routeKeywords", "routing", "route_keywords")
    )
    default_next_question_id: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("defaultNextQuestionId", "nextQuestionId", "defaultNext", "default_next"),
    )
    low_knowledge_phrases: List[str] = Field(
        default_factory=list, validation_alias=AliasChoices("lowKnowledgePhrases", "low_knowledge_phrases")
    )
    low_knowledge_reply: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("systemReplyOnLowKnowledge", "lowKnowledgeReply", "low_knowledge_reply"),
    )
    follow_up: Optional[str] = Field(default=None, validation_alias=AliasChoices("followUp", "follow_up"))

    @field_validator("id", "default_next_question_id", mode="before")
    @classmethod
    def reject_bool_ids(cls, value):
        if isinstance(value, bool):
            raise ValueError("question ids must be integers")
        return value

    @field_validator("question")
    @classmethod
    def require_prompt_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("question text is empty")
        return value.strip()

    @model_validator(mode="after")
    def check_expected_content(self) -> 'QuestionDefinition':
        forms = [
            form for form in (self.expected_answers, self.expected_summary, self.expected_content)
            if form is not None
        ]
        if len(forms) > 1:
            raise ValueError("expected content must be either a list of answers or a single summary")
        return self

    def resolve_default_next(self) -> DefaultNext:
        """Absent means unset, an explicit null means end of interview."""
        if "default_next_question_id" not in self.model_fields_set:
            return DefaultNext.unset()
        if self.default_next_question_id is None:
            return DefaultNext.end()
        return DefaultNext.goto(self.default_next_question_id)

    def resolve_expected_content(self):
        content = self.expected_content
        if content is None:
            content = self.expected_answers if self.expected_answers is not None else self.expected_summary
        if isinstance(content, list):
            answers = tuple(answer for answer in content if answer and answer.strip())
            return answers or None
        if isinstance(content, str):
            return content if content.strip() else None
        return None

    def to_node(self) -> QuestionNode:
        """Convert to the immutable node used by the engine."""
        keywords: List[str] = []
        seen = set()
        for keyword in self.keywords:
            normalized = keyword.strip().lower()
            if normalized and normalized not in seen:
                seen.add(normalized)
                keywords.append(keyword.strip())

        routing = tuple(
            (trigger, target) for trigger, target in self.route_keywords.items() if trigger.strip()
        )
        phrases = tuple(phrase for phrase in self.low_knowledge_phrases if phrase.strip())
        reply = self.low_knowledge_reply.strip() if self.low_knowledge_reply else None

        return QuestionNode(
            id=self.id,
            prompt=self.question,
            keywords=tuple(keywords),
            expected_content=self.resolve_expected_content(),
            routing=routing,
            default_next=self.resolve_default_next(),
            low_knowledge_phrases=phrases,
            low_knowledge_reply=reply or None,
            follow_up=self.follow_up,
        )


def parse_question(raw: Any) -> QuestionNode:
    """
    Validate one raw question definition.

    Raises:
        QuestionDefinitionError: If the definition is not usable
    """
    if not isinstance(raw, dict):
        raise QuestionDefinitionError(f"question definition must be an object, got {type(raw).__name__}")
    try:
        return QuestionDefinition.model_validate(raw).to_node()
    except ValidationError as e:
        raise QuestionDefinitionError(str(e)) from e


def parse_question_set(raw_questions: Any, label: str = "") -> List[QuestionNode]:
    """
    Parse an ordered list of question definitions.

    Unusable definitions and duplicate ids are skipped with a warning; the rest
    of the set is kept in file order.
    """
    if not isinstance(raw_questions, list):
        logger.warning("Question set %s is not a list, ignoring it", label)
        return []

    nodes: List[QuestionNode] = []
    seen_ids = set()
    for position, raw in enumerate(raw_questions):
        try:
            node = parse_question(raw)
        except QuestionDefinitionError as e:
            logger.warning("Skipping question #%d in %s: %s", position, label, e)
            continue
        if node.id in seen_ids:
            logger.warning("Skipping question #%d in %s: duplicate id %d", position, label, node.id)
            continue
        if node.expected_content is None:
            logger.debug("Question %d in %s has no expected content, keyword-only scoring", node.id, label)
        seen_ids.add(node.id)
        nodes.append(node)
    return nodes
