"""Provider dispatch with ordered fallback.

A request walks a chain of backends (configured remote providers in
preference order, then the local heuristic) and returns the first
successful completion. Backends are tried one at a time and never retried.
"""

import asyncio
from typing import Optional

from loguru import logger

from gims.config import (
    PROVIDER_AUTO,
    PROVIDER_NONE,
    GimsConfig,
    LLMProvider,
)
from gims.llm import get_provider
from gims.llm.local import LOCAL_PROVIDER_NAME, generate_local_message
from gims.models import GenerationOptions, ProviderResult

# Returned when even the local heuristic produced nothing
ABSOLUTE_FALLBACK_MESSAGE = "Update project files"


def _parse_provider(name: str) -> Optional[LLMProvider]:
    try:
        return LLMProvider(name)
    except ValueError:
        return None


def build_provider_chain(preference: str, config: GimsConfig) -> list[str]:
    """Resolve a provider preference into an ordered chain of backend names.

    Args:
        preference: "auto", "none", or a provider name.
        config: Configuration holding the credentials.

    Returns:
        Backend names to try in order. Always ends with "local".
    """
    chain: list[str] = []
    preference = (preference or PROVIDER_AUTO).lower()

    if preference == PROVIDER_AUTO:
        chain.extend(p.value for p in config.configured_providers())
    elif preference != PROVIDER_NONE:
        provider = _parse_provider(preference)
        if provider is None:
            logger.debug(f"Unknown provider '{preference}', using local heuristics")
        elif config.has_credential(provider):
            chain.append(provider.value)
        else:
            logger.debug(f"No API key configured for {preference}, using local heuristics")

    chain.append(LOCAL_PROVIDER_NAME)
    # Drop duplicates, keep order
    return list(dict.fromkeys(chain))


def _log_failure(options: GenerationOptions, message: str) -> None:
    if options.verbose:
        logger.warning(message)
    else:
        logger.debug(message)


async def _generate_remote(
    name: str, prompt: str, options: GenerationOptions, config: GimsConfig
) -> str:
    """Run one remote backend under the configured timeout."""
    provider = get_provider(LLMProvider(name), config)
    return await asyncio.wait_for(
        provider.generate(
            prompt,
            model=options.model,
            temperature=options.temperature,
            max_tokens=options.max_tokens,
        ),
        timeout=config.request_timeout,
    )


async def dispatch(
    prompt: str,
    diff: str,
    options: GenerationOptions,
    config: GimsConfig,
) -> ProviderResult:
    """Try each backend in the chain and return the first success.

    Args:
        prompt: The prompt for remote backends.
        diff: The raw diff, used by the local heuristic.
        options: Provider preference and generation parameters.
        config: Credentials and request timeout.

    Returns:
        The raw completion and which backend produced it. Never raises.
    """
    chain = build_provider_chain(options.provider, config)

    for name in chain:
        if options.verbose:
            logger.info(f"Trying provider: {name}")

        if name == LOCAL_PROVIDER_NAME:
            try:
                text = generate_local_message(diff, conventional=options.conventional)
            except Exception as e:
                _log_failure(options, f"Local heuristic failed: {e}")
                continue
            if text.strip():
                return ProviderResult(text=text, provider=name, used_local=True)
            continue

        try:
            text = await _generate_remote(name, prompt, options, config)
        except asyncio.TimeoutError:
            _log_failure(options, f"{name} timed out after {config.request_timeout}s")
            continue
        except Exception as e:
            _log_failure(options, f"{name} failed: {e}")
            continue

        return ProviderResult(text=text, provider=name, used_local=False)

    return ProviderResult(
        text=ABSOLUTE_FALLBACK_MESSAGE, provider=LOCAL_PROVIDER_NAME, used_local=True
    )
