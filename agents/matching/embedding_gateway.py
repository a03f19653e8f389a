"""
Embedding Gateway
Single point of contact with the embedding and chat-completion providers.
"""

import re
from typing import Optional

import anthropic
import openai
import structlog

from backend.core.config import Settings
from backend.core.exceptions import (
    CountMismatchError,
    EmptyInputError,
    ProviderError,
    SummarizationError,
)

logger = structlog.get_logger().bind(agent="embedding_gateway")

_WHITESPACE_RE = re.compile(r"\s+")

SUMMARY_SYSTEM_PROMPT = (
    "You are an expert technical recruiter and project analyst. "
    "You analyze project descriptions and extract structured technical requirements, "
    "skills and role specifications for talent matching. Focus on specific technical "
    "skills and experience levels, normalize geographic information to countries or "
    "regions, and filter out generic soft skills."
)


def normalize_text(text: Optional[str]) -> str:
    """Trim and collapse every run of whitespace (newlines and tabs included) to one space."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()


def build_summary_prompt(description: str, role_seat_counts: dict[str, int]) -> str:
    """
    Build the rubric prompt used to summarize a project.

    Args:
        description: Free-text project description.
        role_seat_counts: Role name to number of seats.

    Returns:
        User prompt for the chat model.
    """
    role_names = [role.strip().title() for role in role_seat_counts]
    roles = ", ".join(
        f"{count} {role.strip().title()}" for role, count in role_seat_counts.items()
    )
    allowed_roles = ", ".join(role_names) if role_names else "none given"

    return f"""You are given a project description and role requirements.

1. Extract key skills grouped strictly under the role types provided ({allowed_roles}).
   Do not invent new role categories.
2. Keep only specific technical or management skills (languages, frameworks, tools, methodologies).
   Include cloud infrastructure inferred from the description; if none is mentioned use "aws" as the default.
   Consider DevOps skills as well.
3. Exclude generic soft skills such as communication, leadership, teamwork, adaptability or being a fast learner.
4. For each role, limit to 5-7 skills and remove duplicates across roles.
5. Identify years of experience, geo and industry if mentioned.
   - If geo is given as a timezone, map it to the most likely country or region
     (e.g. "MT timezone" -> "United States", "CET timezone" -> "Europe", "IST" -> "India").
   - Only if no geo information is found at all, default to "India".
   - Infer industry from the description; if unclear, output "Unspecified".
   - If experience is not mentioned, infer it from industry standards; if that is not possible, output "Unspecified".
6. Break technology stacks down into their constituent technologies
   (e.g. ".NET stack" -> C#, SQL Server, REST API, .NET Core).
7. Summarize in the format:
   "Project requires: Skills: <skills>, Experience: <experience>, Location/Geo: <geo>, Industry: <industry>. Roles: <roles>."

Description: {description}
Roles: {roles}"""


class EmbeddingGateway:
    """
    Gateway to the embedding and chat-completion providers.

    Embeddings always go to OpenAI. Chat completions go to any
    OpenAI-compatible endpoint (xAI Grok by default) or to Anthropic,
    depending on settings.chat_provider. Every call is a single blocking
    round trip; nothing is retried.
    """

    def __init__(
        self,
        settings: Settings,
        embedding_client: Optional[openai.OpenAI] = None,
        chat_client: Optional[openai.OpenAI | anthropic.Anthropic] = None,
    ):
        """
        Initialize gateway.

        Args:
            settings: Application settings.
            embedding_client: Optional pre-built OpenAI client for embeddings.
            chat_client: Optional pre-built client for chat completions.
        """
        self.settings = settings
        self.embedding_model = settings.embedding_model
        self.embedding_dimensions = settings.embedding_dimensions
        self.chat_model = settings.chat_model
        self.chat_provider = settings.chat_provider.lower()
        self._embedding_client = embedding_client
        self._chat_client = chat_client

    @property
    def embedding_client(self) -> openai.OpenAI:
        """Lazy-loaded OpenAI client."""
        if self._embedding_client is None:
            self._embedding_client = openai.OpenAI(
                api_key=self.settings.openai_api_key,
                timeout=self.settings.http_timeout_seconds,
                max_retries=0,
            )
        return self._embedding_client

    @property
    def chat_client(self) -> openai.OpenAI | anthropic.Anthropic:
        """Lazy-loaded chat client for the configured provider."""
        if self._chat_client is None:
            if self.chat_provider == "anthropic":
                self._chat_client = anthropic.Anthropic(
                    api_key=self.settings.anthropic_api_key,
                    timeout=self.settings.http_timeout_seconds,
                    max_retries=0,
                )
            else:
                self._chat_client = openai.OpenAI(
                    api_key=self.settings.chat_api_key or self.settings.openai_api_key,
                    base_url=self.settings.chat_api_base_url,
                    timeout=self.settings.http_timeout_seconds,
                    max_retries=0,
                )
        return self._chat_client

    def embed(self, text: str) -> list[float]:
        """
        Generate an embedding for one text.

        Args:
            text: Text to embed.

        Returns:
            Embedding vector.

        Raises:
            EmptyInputError: Text is blank after normalization.
            ProviderError: The embedding call failed.
        """
        clean = normalize_text(text)
        if not clean:
            raise EmptyInputError("input text cannot be empty")

        try:
            response = self.embedding_client.embeddings.create(
                model=self.embedding_model,
                input=clean,
                dimensions=self.embedding_dimensions,
            )
        except openai.OpenAIError as e:
            logger.error("embedding_failed", error=str(e))
            raise ProviderError(f"failed to generate embedding: {e}") from e

        if not response.data:
            raise ProviderError("no embedding data received")

        return list(response.data[0].embedding)

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for several texts in one API call.

        Blank entries are dropped before the call, so the result lines up
        with the non-blank inputs in their original order.

        Args:
            texts: Texts to embed.

        Returns:
            One embedding per non-blank input.

        Raises:
            EmptyInputError: Nothing left after dropping blank entries.
            CountMismatchError: The provider returned the wrong number of vectors.
            ProviderError: The embedding call failed.
        """
        clean_texts = [clean for clean in (normalize_text(t) for t in texts) if clean]
        if not clean_texts:
            raise EmptyInputError("no valid texts after cleaning")

        try:
            response = self.embedding_client.embeddings.create(
                model=self.embedding_model,
                input=clean_texts,
                dimensions=self.embedding_dimensions,
            )
        except openai.OpenAIError as e:
            logger.error("batch_embedding_failed", count=len(clean_texts), error=str(e))
            raise ProviderError(f"failed to generate batch embeddings: {e}") from e

        if len(response.data) != len(clean_texts):
            raise CountMismatchError(received=len(response.data), expected=len(clean_texts))

        logger.debug("batch_embedded", count=len(clean_texts))
        return [list(item.embedding) for item in response.data]

    def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        model: Optional[str] = None,
    ) -> Optional[str]:
        """
        Run one chat completion.

        Args:
            system_prompt: System instructions.
            user_prompt: User message.
            model: Model override, defaults to settings.chat_model.

        Returns:
            Content of the first choice, or None if the provider returned none.

        Raises:
            ProviderError: The chat call failed.
        """
        model = model or self.chat_model

        if self.chat_provider == "anthropic":
            try:
                response = self.chat_client.messages.create(
                    model=model,
                    max_tokens=self.settings.llm_max_tokens,
                    system=system_prompt,
                    messages=[{"role": "user", "content": user_prompt}],
                )
            except anthropic.AnthropicError as e:
                logger.error("chat_completion_failed", provider="anthropic", model=model, error=str(e))
                raise ProviderError(f"chat completion failed: {e}") from e

            if not response.content:
                return None
            return response.content[0].text

        try:
            response = self.chat_client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
            )
        except openai.OpenAIError as e:
            logger.error("chat_completion_failed", provider="openai", model=model, error=str(e))
            raise ProviderError(f"chat completion failed: {e}") from e

        if not response.choices:
            return None
        return response.choices[0].message.content

    def summarize(self, description: str, role_seat_counts: dict[str, int]) -> str:
        """
        Summarize a project into structured requirements.

        Args:
            description: Free-text project description.
            role_seat_counts: Role name to number of seats.

        Returns:
            Summary text.

        Raises:
            SummarizationError: The call failed or returned no choices.
        """
        prompt = build_summary_prompt(description, role_seat_counts)

        try:
            content = self.complete(SUMMARY_SYSTEM_PROMPT, prompt)
        except ProviderError as e:
            raise SummarizationError(f"summarization failed: {e}") from e

        if content is None:
            raise SummarizationError("no summary returned")

        summary = content.strip()
        logger.info("project_summarized", roles=list(role_seat_counts), summary_length=len(summary))
        return summary
