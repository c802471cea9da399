#!/usr/bin/env python3
"""
batch_render.py - Render template configurations from the command line

Renders one or more template configs against their datasets and either
prints the outputs or writes them to <output>/<template>.txt.

Functions:
    parse_variables() - Turn NAME=VALUE options into a dict
    render_all() - Render each template and collect the outputs
    write_outputs() - Write rendered outputs to files
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from habe import TemplateError
from habe.config import ConfigLoader, DataLoader
from habe.rendering import TemplateRenderer

logger = logging.getLogger("batch_render")


def parse_variables(pairs: Optional[List[str]]) -> Dict[str, str]:
    """
    Parse NAME=VALUE pairs into a dict.

    Examples:
        ["order=A100", "region=eu"] -> {"order": "A100", "region": "eu"}
    """
    variables = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Invalid variable '{pair}', expected NAME=VALUE")
        variables[name] = value
    return variables


def render_all(
    renderer: TemplateRenderer,
    template_names: List[str],
    variables: Optional[Dict[str, str]] = None
) -> Dict[str, List[str]]:
    """
    Render each template config.

    Failures are logged and skipped so one broken template does not stop
    the batch; callers compare the result keys with the requested names.

    Returns:
        Dict mapping template name to its rendered outputs
    """
    results = {}
    for name in template_names:
        try:
            results[name] = renderer.render(name, variables)
            logger.info("Rendered %s: %d outputs", name, len(results[name]))
        except (FileNotFoundError, ValueError, TemplateError) as e:
            logger.error("Failed to render %s: %s", name, e)
    return results


def write_outputs(results: Dict[str, List[str]], output_dir: str) -> List[Path]:
    """Write each template's outputs to <output_dir>/<template>.txt, one per line."""
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    written = []
    for name, outputs in results.items():
        path = out / f"{name}.txt"
        path.write_text("\n".join(outputs) + "\n", encoding="utf-8")
        written.append(path)
    return written


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Render lispy template configurations against their datasets"
    )
    parser.add_argument("templates", nargs="+", help="Template config names to render")
    parser.add_argument("-c", "--config-dir", default="configs", help="Configuration directory (default: configs)")
    parser.add_argument("-d", "--data-dir", default="data", help="Dataset directory (default: data)")
    parser.add_argument("-o", "--output", help="Write outputs to this directory instead of stdout")
    parser.add_argument("--var", action="append", metavar="NAME=VALUE", help="Variable for ${NAME} in foreach expressions")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    try:
        variables = parse_variables(args.var)
    except ValueError as e:
        logger.error("%s", e)
        return 1

    renderer = TemplateRenderer(ConfigLoader(args.config_dir), DataLoader(args.data_dir))
    results = render_all(renderer, args.templates, variables)

    if args.output:
        for path in write_outputs(results, args.output):
            logger.info("Wrote %s", path)
    else:
        for outputs in results.values():
            for output in outputs:
                print(output)

    return 0 if len(results) == len(set(args.templates)) else 1


if __name__ == "__main__":
    sys.exit(main())
