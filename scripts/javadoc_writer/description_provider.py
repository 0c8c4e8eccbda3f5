#!/usr/bin/env python3
"""
Optional Claude-written descriptions.

The template description ("Gets user name.") is fine as a placeholder but
says nothing a reader could not see from the name. When enabled, the model
is asked for a one-sentence summary of the declaration instead. Tags are
never generated this way; they always come from the signature.
"""

import os
from typing import Optional

from anthropic import Anthropic

from constants import CLAUDE_MODEL_HAIKU, DESCRIPTION_MAX_TOKENS, HAIKU_INPUT_TOKEN_COST, HAIKU_OUTPUT_TOKEN_COST
from logger import get_logger

logger = get_logger(__name__)

DESCRIPTION_PROMPT = """You are writing the first sentence of a Javadoc comment.

Declaration kind: {kind}
Declaration name: {name}
Declared type: {type_name}
Enclosing class: {enclosing_class}

Source code:
```java
{source}
```

Reply with exactly one sentence in the third person, ending with a period,
describing what the {kind} does or holds. Do not repeat the signature, do not
use Javadoc tags and do not wrap the answer in a comment."""


def clean_description(response_text: str) -> Optional[str]:
    """Reduce a model reply to a single-line description."""
    lines = [line.strip().lstrip('*').strip() for line in response_text.strip().split('\n')]
    lines = [line for line in lines if line and line not in ('/**', '*/')]
    if not lines:
        return None
    description = ' '.join(lines)
    if description.startswith('@') or '*/' in description:
        return None
    return description


class ClaudeDescriptionProvider:
    """Asks Claude for a one-sentence description of a declaration."""

    def __init__(self, client=None, model: str = CLAUDE_MODEL_HAIKU, max_tokens: int = DESCRIPTION_MAX_TOKENS):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.total_input_tokens = 0
        self.total_output_tokens = 0

    @classmethod
    def from_environment(cls) -> Optional['ClaudeDescriptionProvider']:
        """Create a provider from ANTHROPIC_API_KEY, or None without a key."""
        api_key = os.environ.get('ANTHROPIC_API_KEY')
        if not api_key:
            logger.warning("ANTHROPIC_API_KEY is not set, using template descriptions")
            return None
        return cls(Anthropic(api_key=api_key))

    def describe(self, facts, source: str) -> Optional[str]:
        """Return a description for the declaration, or None on any failure.

        Args:
            facts: SignatureFacts of the declaration
            source: Source text of the declaration

        Returns:
            str: One sentence, or None to keep the template description
        """
        prompt = DESCRIPTION_PROMPT.format(
            kind=facts.kind.value,
            name=facts.name,
            type_name=facts.field_type or facts.return_type or '-',
            enclosing_class=facts.enclosing_class or '-',
            source=source,
        )
        try:
            response = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}]
            )
        except Exception as e:
            logger.warning(f"Could not get a description for {facts.name}: {e}")
            return None

        usage = getattr(response, 'usage', None)
        if usage is not None:
            self.total_input_tokens += usage.input_tokens
            self.total_output_tokens += usage.output_tokens

        description = clean_description(response.content[0].text)
        if description is None:
            logger.warning(f"Ignoring unusable description for {facts.name}")
        return description

    @property
    def total_tokens(self) -> int:
        return self.total_input_tokens + self.total_output_tokens

    @property
    def estimated_cost(self) -> float:
        return (self.total_input_tokens * HAIKU_INPUT_TOKEN_COST
                + self.total_output_tokens * HAIKU_OUTPUT_TOKEN_COST)

    def usage_summary(self) -> str:
        return f"API Usage: {self.total_tokens} tokens, ${self.estimated_cost:.4f} estimated cost"
