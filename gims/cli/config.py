"""CLI commands for global configuration management."""

import os

import typer

from gims import global_config
from gims.config import LLMProvider, get_api_key_env_var, load_config

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global gims configuration in ~/.gims/",
    add_completion=False,
)


def _mask(api_key: str) -> str:
    return api_key[:8] + "..." + api_key[-4:] if len(api_key) > 12 else "***"


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    try:
        config = load_config()
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    config_file = global_config.get_config_file_path()
    typer.echo("Current gims configuration:")
    typer.echo()
    if global_config.is_configured():
        typer.echo(f"  Config File: {config_file}")
    else:
        typer.echo(f"  Config File: {config_file} (not created, using defaults)")
    typer.echo(f"  Provider: {config.provider}")
    typer.echo(f"  Model: {config.model or 'provider default'}")
    typer.echo(f"  Conventional: {config.conventional}")
    typer.echo(f"  Max Tokens: {config.max_tokens}")
    typer.echo(f"  Temperature: {config.temperature}")
    typer.echo(f"  Token Budget: {config.token_budget}")
    typer.echo(f"  Request Timeout: {config.request_timeout}s")
    typer.echo(f"  Cache: {'enabled' if config.cache_enabled else 'disabled'}")
    typer.echo()

    for provider in LLMProvider:
        env_var = get_api_key_env_var(provider)
        api_key = config.get_api_key(provider)
        if not api_key:
            typer.echo(f"  API Key ({env_var}): not set")
            continue
        # The environment wins over a stored key
        stored = global_config.get_credential(env_var)
        if os.environ.get(env_var) != api_key and stored == api_key:
            source = "credentials file"
        else:
            source = "environment"
        typer.echo(f"  API Key ({env_var}): {_mask(api_key)} [{source}]")


@config_app.command("set-key")
def config_set_key(
    provider: str = typer.Argument(
        ...,
        help="Provider name (gemini, openai, groq)"
    )
) -> None:
    """Set or update an API key for a provider."""
    try:
        llm_provider = LLMProvider(provider.lower())
    except ValueError:
        typer.echo(f"Invalid provider: {provider}", err=True)
        typer.echo("Valid providers: " + ", ".join(p.value for p in LLMProvider))
        raise typer.Exit(1)

    env_var = get_api_key_env_var(llm_provider)
    api_key = typer.prompt(f"Enter your {llm_provider.value} API key", hide_input=True)

    try:
        global_config.save_credential(env_var, api_key.strip())
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ API key saved for {llm_provider.value}")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Config key, e.g. provider, model, conventional"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set a value in ~/.gims/config.yaml."""
    try:
        stored = global_config.set_config_value(key, value)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ {key} = {stored}")
