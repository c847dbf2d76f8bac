"""CLI Commands: gait config ..."""

from urllib.parse import urlparse

from gait.config import (
    ConfigError,
    ConfigManager,
    ClaudeProvider,
    OllamaProvider,
    OpenAIProvider,
    PROVIDER_TYPES,
)
from gait.output import bold, dim, info, success, warning, print_success, print_warning, print_rule
from gait.cli.utils import confirm, prompt_choice, prompt_text

DEFAULT_MODELS = {
    OpenAIProvider.TYPE: "gpt-4o-mini",
    OllamaProvider.TYPE: "llama3.2:3b",
    ClaudeProvider.TYPE: "claude-sonnet-4-20250514",
}
DEFAULT_OLLAMA_URL = "http://localhost:11434"


def mask_key(api_key: str | None) -> str:
    if not api_key:
        return "(from environment)"
    return api_key[:10] + '...'


def _print_provider(index: int, provider, is_default: bool, show_keys: bool = False) -> None:
    default_flag = success(' [DEFAULT]') if is_default else ''
    print(f"{info(f'{index}.')} {provider.name}{default_flag}")
    print(dim(f"   Type: {provider.type}"))
    print(dim(f"   Model: {provider.model}"))
    if getattr(provider, 'url', None):
        print(dim(f"   URL: {provider.url}"))
    if show_keys and hasattr(provider, 'api_key'):
        print(dim(f"   API Key: {mask_key(provider.api_key)}"))


def show_config(manager: ConfigManager, show_keys: bool = False, path_only: bool = False) -> int:
    if path_only:
        print(f"Config file: {manager.config_path}")
        return 0

    config = manager.get_config()
    print(f"\n{bold('Current Configuration')}\n")
    print(f"  {dim('Loaded from:')} {manager.config_path}")
    print()
    print(f"  {bold('Settings:')}")
    print(f"    default_format:   {info(config.default_format)}")
    print(f"    max_length:       {info(str(config.max_length))}")
    print(f"    timeout:          {info(str(config.timeout) if config.timeout else 'provider default')}")
    print(f"    default_provider: {info(config.default_provider or 'None set')}")

    print(f"\n  {bold('LLM Providers:')}")
    print_rule(20)
    if not config.providers:
        print(warning("   No providers configured"))
    for i, provider in enumerate(config.providers, 1):
        _print_provider(i, provider, provider.name == config.default_provider, show_keys)

    print(f"\n  {dim('Run')} gait config add-provider {dim('to add one')}\n")
    return 0


def set_value(manager: ConfigManager, key: str, value: str) -> int:
    stored = manager.set_value(key, value)
    print_success(f"Set {key} to: {stored}")
    return 0


def _valid_url(url: str) -> bool:
    parsed = urlparse(url)
    return bool(parsed.scheme and parsed.netloc)


def _build_provider(provider_type: str, name: str, model: str | None, api_key: str | None, url: str | None):
    """Provider record from flag values. Raises ConfigError for missing or bad fields."""
    model = model or DEFAULT_MODELS[provider_type]
    if provider_type == OpenAIProvider.TYPE:
        if url and not _valid_url(url):
            raise ConfigError(f"Invalid URL: {url}")
        return OpenAIProvider(name=name, model=model, api_key=api_key or None, url=url or None)
    if provider_type == OllamaProvider.TYPE:
        url = url or DEFAULT_OLLAMA_URL
        if not _valid_url(url):
            raise ConfigError(f"Invalid URL: {url}")
        return OllamaProvider(name=name, model=model, url=url)
    if provider_type == ClaudeProvider.TYPE:
        return ClaudeProvider(name=name, model=model, api_key=api_key or None)
    raise ConfigError(f"Provider type must be one of: {', '.join(PROVIDER_TYPES)}")


def _ask_provider(args):
    """Interactive provider setup, pre-filled from any flags given."""
    name = prompt_text("Provider name", default=args.name)
    provider_type = args.type or prompt_choice("Provider type:", [
        (OpenAIProvider.TYPE, "OpenAI (GPT-4o, GPT-4o mini)"),
        (OllamaProvider.TYPE, "Ollama (local)"),
        (ClaudeProvider.TYPE, "Anthropic (Claude)"),
    ])
    if provider_type is None:
        return None

    model = prompt_text("Model name", default=args.model or DEFAULT_MODELS[provider_type])
    api_key, url = args.api_key, args.url
    if provider_type == OllamaProvider.TYPE:
        while True:
            url = prompt_text("Ollama server URL", default=url or DEFAULT_OLLAMA_URL)
            if _valid_url(url):
                break
            print(dim("  Please enter a valid URL"))
    elif not api_key:
        api_key = prompt_text("API key (Enter to use the environment variable)", required=False, secret=True)

    return _build_provider(provider_type, name, model, api_key, url)


def add_provider(manager: ConfigManager, args) -> int:
    if args.name and args.type:
        provider = _build_provider(args.type, args.name, args.model, args.api_key, args.url)
    else:
        provider = _ask_provider(args)
        if provider is None:
            print(dim("Cancelled."))
            return 0

    manager.add_provider(provider)
    print_success(f"Added provider: {provider.name}")

    config = manager.get_config()
    if not config.default_provider and confirm("Set this as the default provider?"):
        manager.set_default_provider(provider.name)
        print_success("Set as default provider")
    return 0


def list_providers(manager: ConfigManager) -> int:
    config = manager.get_config()
    print(f"{bold('Configured LLM Providers')}\n")
    if not config.providers:
        print(warning("No providers configured"))
        print(dim("\nUse: gait config add-provider"))
        return 0

    for i, provider in enumerate(config.providers, 1):
        _print_provider(i, provider, provider.name == config.default_provider)
        if i < len(config.providers):
            print()
    return 0


def _choose_provider(manager: ConfigManager, label: str) -> str | None:
    config = manager.get_config()
    return prompt_choice(label, [(p.name, f"{p.name} ({p.type})") for p in config.providers])


def remove_provider(manager: ConfigManager, name: str | None) -> int:
    config = manager.get_config()
    if not config.providers:
        print(warning("No providers configured"))
        return 0

    name = name or _choose_provider(manager, "Which provider to remove?")
    if name is None:
        return 0

    was_default = config.default_provider == name
    if not manager.remove_provider(name):
        raise ConfigError(f"Provider '{name}' not found")

    if was_default:
        print_warning("Removed default provider")
        if manager.get_config().providers:
            new_default = _choose_provider(manager, "Set a new default provider?")
            if new_default:
                manager.set_default_provider(new_default)
                print_success(f"Set new default: {new_default}")

    print_success(f"Removed provider: {name}")
    return 0


def set_default(manager: ConfigManager, name: str | None) -> int:
    if not manager.get_config().providers:
        print(warning("No providers configured"))
        print(dim("Use: gait config add-provider"))
        return 0

    name = name or _choose_provider(manager, "Which provider should be the default?")
    if name is None:
        return 0

    manager.set_default_provider(name)
    print_success(f"Default provider: {name}")
    return 0


def reset_config(manager: ConfigManager) -> int:
    if not confirm("Clear all configuration, including providers?", default=False):
        print(dim("Cancelled."))
        return 0
    manager.reset()
    print_success(f"Configuration cleared ({manager.config_path})")
    return 0


def run_config(args, manager: ConfigManager | None = None) -> int:
    """Dispatch 'gait config <action>'. Defaults to 'show'."""
    manager = manager or ConfigManager()
    action = args.config_command or 'show'

    if action == 'show':
        return show_config(manager, getattr(args, 'show_keys', False), getattr(args, 'path', False))
    if action == 'set':
        return set_value(manager, args.key, args.value)
    if action == 'add-provider':
        return add_provider(manager, args)
    if action == 'list-providers':
        return list_providers(manager)
    if action == 'remove-provider':
        return remove_provider(manager, args.name)
    if action == 'set-default':
        return set_default(manager, args.name)
    if action == 'reset':
        return reset_config(manager)

    raise ConfigError(f"Unknown config action: {action}")
