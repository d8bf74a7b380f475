"""Chat completion via LiteLLM."""

from __future__ import annotations

from tdg.core.config import LLMConfig
from tdg.core.errors import AnalysisRequestError


async def complete(
    messages: list[dict[str, str]],
    config: LLMConfig,
    **kwargs: object,
) -> str:
    """Send a chat completion request via LiteLLM.

    No retries are made here; a failed call surfaces to the caller, which
    may resend the same messages.

    Args:
        messages: Chat messages in OpenAI format.
        config: LLM configuration. ``timeout`` is enforced by the transport.
        **kwargs: Additional kwargs passed to litellm.acompletion.

    Returns:
        The assistant's response text.

    Raises:
        AnalysisRequestError: On any provider error (authentication, rate
            limit, timeout, context overflow, bad request, server or
            transport failure), or an empty reply.
    """
    try:
        import litellm
    except ImportError:
        raise ImportError("LiteLLM is not installed. Install with: pip install litellm")

    try:
        response = await litellm.acompletion(
            model=config.model,
            messages=messages,
            api_base=config.api_base,
            api_key=config.api_key,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout=config.timeout,
            num_retries=0,
            **kwargs,
        )
    except litellm.AuthenticationError as e:
        raise AnalysisRequestError(
            f"Invalid API key. Please check the API key for {config.model}."
        ) from e
    except litellm.RateLimitError as e:
        raise AnalysisRequestError("API rate limit exceeded. Please try again later.") from e
    except litellm.Timeout as e:
        raise AnalysisRequestError(
            f"AI service did not answer within {config.timeout:g} seconds."
        ) from e
    except litellm.ContextWindowExceededError as e:
        raise AnalysisRequestError(
            f"Transcript is too long for {config.model}. Try a model with a larger context."
        ) from e
    except (
        litellm.APIError,
        litellm.BadRequestError,
        litellm.NotFoundError,
        litellm.PermissionDeniedError,
        litellm.UnprocessableEntityError,
        litellm.InternalServerError,
        litellm.ServiceUnavailableError,
    ) as e:
        raise AnalysisRequestError(f"Failed to get summary from AI service: {e}") from e
    except litellm.APIConnectionError as e:
        raise AnalysisRequestError(f"Could not reach AI service: {e}") from e

    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, KeyError, TypeError):
        content = None
    if not content or not content.strip():
        raise AnalysisRequestError("Invalid response from AI service")
    return content
