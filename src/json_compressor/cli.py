"""Command-line interface for the JSON Compressor."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import click

from .compressor import JSONCompressor
from .config import CompressorConfig
from .types import Action, ActionResult, Classification, ExecutionMode
from .utils.size_calculator import SizeCalculator


def _build_compressor(config_path: Optional[Path], backend: Optional[str], verbose: bool) -> JSONCompressor:
    config = CompressorConfig(config_path)
    if backend:
        config.set('execution', 'worker_backend', backend)

    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, config.log_level, logging.INFO),
        format='%(levelname)s %(name)s: %(message)s'
    )
    return JSONCompressor(config=config)


def _emit(result: ActionResult, output: Optional[Path]) -> None:
    if not result.success:
        click.echo(f"❌ Error: {result.error}", err=True)
        raise SystemExit(1)

    if output:
        output.write_text(result.output, encoding='utf-8')
        click.echo(f"✅ Wrote result to {output}", err=True)
    else:
        click.echo(result.output)

    mode = "Worker" if result.mode == ExecutionMode.DELEGATED else "Sync"
    click.echo(f"📊 {result.original_size} B -> {result.result_size} B in {result.duration_ms:.2f} ms ({mode})",
               err=True)
    if result.action == Action.COMPRESS:
        calculator = SizeCalculator()
        click.echo(f"📉 {calculator.format_reduction(result.original_size, result.result_size)}", err=True)


def transform_options(func):
    """Options shared by the transforming commands."""
    func = click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')(func)
    func = click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
                        help='Path to a JSON config file')(func)
    func = click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
                        help='Write the result to this file instead of stdout')(func)
    func = click.option('--backend', type=click.Choice(['thread', 'process']),
                        help='Worker backend for --worker mode')(func)
    func = click.option('--worker/--inline', 'use_worker', default=None,
                        help='Run in an isolated worker or on the main thread (default: from config)')(func)
    func = click.argument('input_file', type=click.File('r', encoding='utf-8'), default='-')(func)
    return func


@click.group()
@click.version_option(version="1.0.0")
def main():
    """JSON Compressor - Convert between JSON and LZ-string compressed text."""
    pass


@main.command()
@click.argument('input_file', type=click.File('r', encoding='utf-8'), default='-')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
def analyze(input_file, verbose: bool):
    """Report whether INPUT_FILE holds JSON or a compressed string."""
    compressor = _build_compressor(None, None, verbose)
    analysis = compressor.analyze(input_file.read())

    click.echo(f"Format: {analysis.classification.value}")
    click.echo(f"Size: {SizeCalculator.format_size(analysis.byte_size)}")
    click.echo(analysis.status_message)

    if analysis.classification == Classification.UNRECOGNIZED:
        raise SystemExit(1)


@main.command()
@transform_options
def compress(input_file, use_worker: Optional[bool], backend: Optional[str],
             output: Optional[Path], config_path: Optional[Path], verbose: bool):
    """Compress the JSON document in INPUT_FILE (default: stdin)."""
    compressor = _build_compressor(config_path, backend, verbose)
    result = asyncio.run(compressor.run_action(Action.COMPRESS, input_file.read(), use_worker))
    _emit(result, output)


@main.command()
@transform_options
def decompress(input_file, use_worker: Optional[bool], backend: Optional[str],
               output: Optional[Path], config_path: Optional[Path], verbose: bool):
    """Decompress the compressed string in INPUT_FILE (default: stdin)."""
    compressor = _build_compressor(config_path, backend, verbose)
    result = asyncio.run(compressor.run_action(Action.DECOMPRESS, input_file.read(), use_worker))
    _emit(result, output)


@main.command()
@transform_options
def process(input_file, use_worker: Optional[bool], backend: Optional[str],
            output: Optional[Path], config_path: Optional[Path], verbose: bool):
    """Detect the format of INPUT_FILE and run the opposite transform."""
    compressor = _build_compressor(config_path, backend, verbose)
    text = input_file.read()

    analysis = compressor.analyze(text)
    click.echo(analysis.status_message, err=True)

    result = asyncio.run(compressor.handle_action(text, use_worker))
    _emit(result, output)


if __name__ == '__main__':
    main()
