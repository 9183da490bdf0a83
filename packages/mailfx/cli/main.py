"""Command-line interface for mailfx.

Generated markup goes to stdout; tables, notices and errors go through rich
consoles (errors on stderr) so the markup can be piped.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
import random
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mailfx.core.ai.adapter import AIAdapter, create_adapter
from mailfx.core.ai.errors import AIServiceError
from mailfx.core.ai.models import WordSelection
from mailfx.core.ai.prompts.loader import LoadError
from mailfx.core.ai.prompts.renderer import RenderError
from mailfx.core.composition.engine import compose
from mailfx.core.config.loader import apply_logging_config, load_app_config
from mailfx.core.config.models import AppConfig
from mailfx.core.effects.catalog import list_effects
from mailfx.core.effects.models import ActiveEffectSelection, CompositionOptions, EffectCategory
from mailfx.core.patching.applier import apply_word_selections, insert_emojis
from mailfx.core.patching.tokenizer import extract_text, strip_decorations
from mailfx.core.randomizer.policy import RandomCompositionPolicy

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1


class CliError(Exception):
    """User-facing CLI failure (reported without a traceback)."""


def _read_input(value: str) -> str:
    """Text argument, or stdin when the argument is '-'."""
    if value == "-":
        return sys.stdin.read()
    return value


def _read_markup(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    file_path = Path(path)
    if not file_path.exists():
        raise CliError(f"Markup file not found: {file_path}")
    return file_path.read_text(encoding="utf-8")


def _options(args: argparse.Namespace, config: AppConfig) -> CompositionOptions:
    return config.composition.to_options(args.intensity, args.base_size)


def _selection(args: argparse.Namespace) -> ActiveEffectSelection:
    return ActiveEffectSelection(color=args.color, size=args.size)


def _emit(markup: str) -> None:
    sys.stdout.write(markup)
    if not markup.endswith("\n"):
        sys.stdout.write("\n")


def _adapter(args: argparse.Namespace, config: AppConfig) -> AIAdapter:
    api_key = args.api_key or config.ai.api_key
    if not api_key:
        raise CliError(
            "No Gemini API key: pass --api-key, set GEMINI_API_KEY or ai.api_key in the config"
        )
    return create_adapter(api_key, config.ai)


def cmd_effects(args: argparse.Namespace, config: AppConfig) -> int:
    """List the effect catalog."""
    table = Table(title="Effects")
    table.add_column("Category")
    table.add_column("Key", style="bold", no_wrap=True)
    table.add_column("Icon")
    table.add_column("Name")
    table.add_column("Description")
    for category in EffectCategory:
        for key, effect in list_effects(category).items():
            table.add_row(category.value, key, effect.icon, effect.name, effect.description)
    console.print(table)
    return EXIT_OK


def cmd_compose(args: argparse.Namespace, config: AppConfig) -> int:
    text = _read_input(args.text)
    _emit(compose(text, _selection(args), _options(args, config)))
    return EXIT_OK


def cmd_random(args: argparse.Namespace, config: AppConfig) -> int:
    text = _read_input(args.text)
    rng = random.Random(args.seed) if args.seed is not None else None
    policy = RandomCompositionPolicy(config.random_policy, rng=rng)
    options = _options(args, config)
    result = policy.compose_chaos(text, options) if args.chaos else policy.compose(text, options)
    _emit(result.markup)
    if args.explain:
        err_console.print_json(result.applied.model_dump_json(exclude_defaults=True))
    return EXIT_OK


async def _list_models(args: argparse.Namespace, config: AppConfig) -> int:
    async with _adapter(args, config) as adapter:
        ranked = await adapter.ranked_models()

    table = Table(title="Compatible models (best first)")
    table.add_column("#", justify="right")
    table.add_column("Model", style="bold")
    table.add_column("Score", justify="right")
    for position, descriptor in enumerate(ranked, start=1):
        table.add_row(str(position), descriptor.name, str(descriptor.quality_score))
    console.print(table)
    return EXIT_OK


def cmd_models(args: argparse.Namespace, config: AppConfig) -> int:
    return asyncio.run(_list_models(args, config))


async def _select_words(args: argparse.Namespace, config: AppConfig) -> int:
    selection = _selection(args)
    if args.markup and selection.is_empty():
        raise CliError("Styling markup needs --color and/or --size")
    markup = _read_markup(args.markup) if args.markup else None
    text = extract_text(markup) if markup is not None else _read_input(args.text or "-")

    async with _adapter(args, config) as adapter:
        result = await adapter.select_words_for_coloring(text, args.density)

    if result.model_used:
        err_console.print(f"[green]Model:[/green] {result.model_used}")
    if markup is None:
        _emit(json.dumps(result.words, ensure_ascii=False))
    else:
        patched = apply_word_selections(
            markup, result.as_selections(), selection, _options(args, config)
        )
        _emit(patched)
    return EXIT_OK


def cmd_words(args: argparse.Namespace, config: AppConfig) -> int:
    return asyncio.run(_select_words(args, config))


async def _select_emoji(args: argparse.Namespace, config: AppConfig) -> int:
    text = _read_input(args.text)
    async with _adapter(args, config) as adapter:
        result = await adapter.select_emoji_for_text(text)

    if result.model_used:
        err_console.print(f"[green]Model:[/green] {result.model_used}")
    if not result.emoji:
        return EXIT_OK
    if args.markup:
        selection = WordSelection(word=args.word or text.strip(), emoji=result.emoji)
        _emit(insert_emojis(_read_markup(args.markup), [selection]))
    else:
        _emit(result.emoji)
    return EXIT_OK


def cmd_emoji(args: argparse.Namespace, config: AppConfig) -> int:
    return asyncio.run(_select_emoji(args, config))


def cmd_strip(args: argparse.Namespace, config: AppConfig) -> int:
    markup = _read_markup(args.markup)
    _emit(extract_text(markup) if args.text else strip_decorations(markup))
    return EXIT_OK


def _add_composition_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--intensity", type=int, help="Effect intensity 1-10 (default: config)")
    p.add_argument("--base-size", type=int, help="Base font size in px (default: config)")


def _add_selection_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--color", help="Color effect key (see `mailfx effects`)")
    p.add_argument("--size", help="Size effect key (see `mailfx effects`)")


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="mailfx",
        description="mailfx - text effects for mail composition",
    )
    p.add_argument("--config", help="Path to app config (.json/.yaml; default: mailfx.yaml)")
    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    p.add_argument("--api-key", help="Gemini API key (default: GEMINI_API_KEY)")
    sub = p.add_subparsers(dest="cmd", required=True)

    effects = sub.add_parser("effects", help="List available effects")
    effects.set_defaults(func=cmd_effects)

    comp = sub.add_parser("compose", help="Compose text with catalog effects")
    comp.add_argument("text", help="Text to decorate ('-' reads stdin)")
    _add_selection_args(comp)
    _add_composition_args(comp)
    comp.set_defaults(func=cmd_compose)

    rnd = sub.add_parser("random", help="Compose text with a random effect combination")
    rnd.add_argument("text", help="Text to decorate ('-' reads stdin)")
    rnd.add_argument("--chaos", action="store_true", help="Also draw bold/italic/underline")
    rnd.add_argument("--seed", type=int, help="Seed for reproducible output")
    rnd.add_argument("--explain", action="store_true", help="Print the applied effects")
    _add_composition_args(rnd)
    rnd.set_defaults(func=cmd_random)

    models = sub.add_parser("models", help="List compatible AI models, best first")
    models.set_defaults(func=cmd_models)

    words = sub.add_parser("words", help="Pick important words with AI (and style them)")
    words.add_argument("text", nargs="?", help="Text to analyze ('-' reads stdin)")
    words.add_argument("--markup", help="Markup file to patch ('-' reads stdin)")
    words.add_argument("--density", type=float, help="Percent of words to pick (default: config)")
    _add_selection_args(words)
    _add_composition_args(words)
    words.set_defaults(func=cmd_words)

    emo = sub.add_parser("emoji", help="Pick one emoji for a text with AI")
    emo.add_argument("text", help="Text to analyze ('-' reads stdin)")
    emo.add_argument("--markup", help="Markup file to insert the emoji into")
    emo.add_argument("--word", help="Word to anchor the emoji on (default: the text)")
    emo.set_defaults(func=cmd_emoji)

    strip = sub.add_parser("strip", help="Remove decoration glyphs from markup")
    strip.add_argument("markup", help="Markup file ('-' reads stdin)")
    strip.add_argument("--text", action="store_true", help="Output plain text instead")
    strip.set_defaults(func=cmd_strip)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    try:
        config = load_app_config(args.config)
        apply_logging_config(config, args.log_level)
        return args.func(args, config)
    except (CliError, AIServiceError, LoadError, RenderError, FileNotFoundError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        err_console.print(f"[red]ERROR: {escape(str(e))}[/red]", highlight=False)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
