# main.py

import argparse
import json
import os
import sys
import time
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from aadhaar_extractor.config import get_config, reset_config
from aadhaar_extractor.exceptions import ConfigurationError
from aadhaar_extractor.logger import get_logger, set_debug
from aadhaar_extractor.orchestrator import DocumentOrchestrator
from aadhaar_extractor.utils.file_utils import collect_pdfs
from aadhaar_extractor.utils.progress import get_progress
from aadhaar_extractor.validators import mask_id_number

# Progress, prompts and messages; stdout carries only the results
console = Console(stderr=True, force_terminal=True)


def ask_password_for(path: Path, progress):
    def provider():
        progress.stop()
        console.print(
            f"[yellow]🔒 {path.name} is password protected.[/yellow] "
            "e-Aadhaar passwords are the first 4 letters of the name in capitals "
            "followed by the birth year, e.g. ABHI1999."
        )
        password = Prompt.ask("Password (leave empty to skip)", password=True, default="", console=console)
        progress.start()
        return password or None

    return provider


def build_table(rows, show_full_id: bool) -> Table:
    table = Table(title="e-Aadhaar extraction")
    table.add_column("File")
    table.add_column("Status")
    table.add_column("Name")
    table.add_column("DOB")
    table.add_column("Aadhaar")
    table.add_column("Gender")
    table.add_column("Tier")

    for path, result in rows:
        if result.success:
            data = result.data
            aadhaar = data.formatted_id_number if show_full_id else mask_id_number(data.id_number)
            table.add_row(
                path.name, "[green]ok[/green]", data.name, data.date_of_birth,
                aadhaar, data.gender, result.strategy or "",
            )
        else:
            table.add_row(path.name, "[red]failed[/red]", result.error or "", "", "", "", "")
    return table


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Extract identity fields from e-Aadhaar PDFs")

    parser.add_argument("inputs", nargs="+", help="PDF files or directories containing PDFs")
    parser.add_argument("--password", help="Password to try for encrypted PDFs")
    parser.add_argument("--no-prompt", action="store_true", help="Never ask for a password")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--show-full-id", action="store_true", help="Do not mask Aadhaar numbers")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")

    args = parser.parse_args(argv)

    if args.debug:
        os.environ["DEBUG"] = "1"
        reset_config()
        set_debug(True)

    logger = get_logger("aadhaar_extractor.cli")
    config = get_config()

    paths = collect_pdfs(Path(p) for p in args.inputs)
    if not paths:
        console.print("[red]No PDF files found[/red]")
        return 2

    logger.info(f"🪪 Processing {len(paths)} document(s)")
    try:
        orchestrator = DocumentOrchestrator(config=config)
    except ConfigurationError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        return 2

    start_time = time.perf_counter()
    rows = []

    interactive = not args.no_prompt and sys.stdin.isatty()
    progress = get_progress(console)

    with progress:
        task = progress.add_task("Extracting", total=len(paths))
        for path in paths:
            provider = ask_password_for(path, progress) if interactive else None
            result = orchestrator.process_file(path, password=args.password, password_provider=provider)
            rows.append((path, result))
            progress.advance(task)

    elapsed = time.perf_counter() - start_time
    failures = sum(1 for _, r in rows if not r.success)

    if args.json:
        payload = []
        for path, result in rows:
            item = result.to_dict()
            item["file"] = str(path)
            if result.success and not args.show_full_id:
                item["data"]["aadhar"] = mask_id_number(result.data.id_number)
            payload.append(item)
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        Console().print(build_table(rows, args.show_full_id))

    logger.info(f"🎉 Done in {elapsed:.2f} seconds: {len(rows) - failures} ok, {failures} failed")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
