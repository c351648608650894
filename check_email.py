#!/usr/bin/env python3
"""
check_email.py — command line front end for the Verifalia verification client

Features
- Submit addresses or whole files for verification and wait for the results
- Inspect, list and delete verification jobs
- Show the account credit balance
- Credentials loaded from .env

Environment (.env)
  VERIFALIA_USERNAME=...      # with VERIFALIA_PASSWORD
  VERIFALIA_PASSWORD=...
  VERIFALIA_APP_KEY=...       # alternative to username/password
  VERIFALIA_CERT_FILE=...     # mutual TLS, optionally with VERIFALIA_KEY_FILE

Usage
  python check_email.py verify EMAIL [EMAIL...] [--quality High]
  python check_email.py verify-file list.csv [--column 2]
  python check_email.py list --newest-first --max-items 20
  python check_email.py balance
"""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional, Tuple

import click
from dotenv import load_dotenv

from envelope_client import (
    ClientConfig,
    Direction,
    FileSubmissionOptions,
    Job,
    JobOverview,
    LineEnding,
    ListingOptions,
    SubmissionOptions,
    VerifierClient,
    VerifierError,
    WaitingOptions,
    parse_timespan,
)

CLASSIFICATION_ICONS = {
    "Deliverable": "✅",
    "Risky": "⚠️",
    "Undeliverable": "🚫",
    "Unknown": "❔",
}

# --------------------------
# Output
# --------------------------


def print_overview(overview: JobOverview) -> None:
    print(f"🆔 Job:             {overview.id}")
    print(f"📊 Status:          {overview.status.value}")
    print(f"📧 Entries:         {overview.no_of_entries}")
    if overview.name:
        print(f"🏷  Name:            {overview.name}")
    if overview.quality:
        print(f"🎯 Quality:         {overview.quality}")
    if overview.submitted_on:
        print(f"🕒 Submitted:       {overview.submitted_on.isoformat()}")
    if overview.completed_on:
        print(f"🏁 Completed:       {overview.completed_on.isoformat()}")
    if overview.progress is not None:
        print(f"⏳ Progress:        {overview.progress.percentage:.0%}")
        if overview.progress.estimated_time_remaining:
            print(f"   ETA:             {overview.progress.estimated_time_remaining}")


def print_job(job: Job) -> None:
    print("\n================ Verification Job =================")
    print_overview(job.overview)

    if job.entries:
        print("\n---- Entries ----")
        for entry in job.entries:
            icon = CLASSIFICATION_ICONS.get(entry.classification.value, "❔")
            extra = ""
            if entry.duplicate_of is not None:
                extra = f" (duplicate of #{entry.duplicate_of})"
            elif entry.custom:
                extra = f" [{entry.custom}]"
            print(
                f"{icon} {entry.input_data:35s} {entry.classification.value:13s} "
                f"{entry.status.value}{extra}"
            )
    print("===================================================\n")


# --------------------------
# CLI
# --------------------------


def _client() -> VerifierClient:
    return VerifierClient.from_config(ClientConfig.from_env())


def _timespan(ctx, param, value: Optional[str]) -> Optional[timedelta]:
    if value is None:
        return None
    try:
        return parse_timespan(value)
    except VerifierError as e:
        raise click.BadParameter(str(e))


def _finish(client: VerifierClient, job: Job, no_wait: bool) -> None:
    if not no_wait:
        job = client.wait_for_completion(job, WaitingOptions())
        if job is None:
            print("\n❌ The job has been deleted or has expired while waiting")
            return
    print_job(job)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", is_flag=True, help="Log every HTTP attempt.")
def main(verbose: bool) -> None:
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("emails", nargs=-1, required=True)
@click.option("--quality", help="Quality level (Standard, High, Extreme).")
@click.option("--deduplication", help="Deduplication mode (Off, Safe, Relaxed).")
@click.option("--priority", type=click.IntRange(0, 255), help="Job priority, 0..255.")
@click.option("--retention", callback=_timespan, help="Retention as [days.]h:m:s.")
@click.option("--name", help="Name for the job.")
@click.option("--no-wait", is_flag=True, help="Return right after the submission.")
def verify(
    emails: Tuple[str, ...],
    quality: Optional[str],
    deduplication: Optional[str],
    priority: Optional[int],
    retention: Optional[timedelta],
    name: Optional[str],
    no_wait: bool,
) -> None:
    """Verify one or more email addresses."""
    options = SubmissionOptions(
        name=name,
        quality=quality,
        deduplication=deduplication,
        priority=priority,
        retention=retention,
    )
    try:
        with _client() as client:
            _finish(client, client.submit(list(emails), options), no_wait)
    except VerifierError as e:
        raise click.ClickException(str(e))


@main.command("verify-file")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--content-type", help="MIME type; guessed from the extension if omitted.")
@click.option("--starting-row", type=int, default=0, show_default=True)
@click.option("--ending-row", type=int)
@click.option("--column", type=int, default=0, show_default=True)
@click.option("--sheet", type=int, default=0, show_default=True)
@click.option(
    "--line-ending",
    type=click.Choice([e.name for e in LineEnding], case_sensitive=False),
    default="AUTO",
    show_default=True,
)
@click.option("--delimiter")
@click.option("--quality", help="Quality level (Standard, High, Extreme).")
@click.option("--no-wait", is_flag=True, help="Return right after the submission.")
def verify_file(
    path: str,
    content_type: Optional[str],
    starting_row: int,
    ending_row: Optional[int],
    column: int,
    sheet: int,
    line_ending: str,
    delimiter: Optional[str],
    quality: Optional[str],
    no_wait: bool,
) -> None:
    """Verify the addresses contained in a file."""
    file_options = FileSubmissionOptions(
        content_type=content_type,
        starting_row=starting_row,
        ending_row=ending_row,
        column=column,
        sheet=sheet,
        line_ending=LineEnding[line_ending.upper()],
        delimiter=delimiter,
    )
    try:
        with _client() as client:
            job = client.submit_file(path, file_options, SubmissionOptions(quality=quality))
            _finish(client, job, no_wait)
    except VerifierError as e:
        raise click.ClickException(str(e))


@main.command()
@click.argument("job_id")
def get(job_id: str) -> None:
    """Show a job along with its entries."""
    try:
        with _client() as client:
            job = client.get_job(job_id)
    except VerifierError as e:
        raise click.ClickException(str(e))

    if job is None:
        print(f"\n❌ Job {job_id} not found (deleted or expired)")
        return
    print_job(job)


@main.command()
@click.argument("job_id")
def overview(job_id: str) -> None:
    """Show a job's overview only."""
    try:
        with _client() as client:
            result = client.get_overview(job_id)
    except VerifierError as e:
        raise click.ClickException(str(e))

    if result is None:
        print(f"\n❌ Job {job_id} not found (deleted or expired)")
        return
    print("\n================ Job Overview =================")
    print_overview(result)
    print("===============================================\n")


@main.command()
@click.argument("job_id")
def delete(job_id: str) -> None:
    """Delete a job."""
    try:
        with _client() as client:
            client.delete_job(job_id)
    except VerifierError as e:
        raise click.ClickException(str(e))
    print(f"🗑  Job {job_id} deleted")


@main.command("list")
@click.option("--limit", type=int, help="Page size hint for each request.")
@click.option("--newest-first", is_flag=True, help="Sort by creation date, descending.")
@click.option("--max-items", type=int, default=50, show_default=True)
def list_jobs(limit: Optional[int], newest_first: bool, max_items: int) -> None:
    """List verification jobs."""
    options = ListingOptions(
        limit=limit,
        direction=Direction.BACKWARD if newest_first else Direction.FORWARD,
    )
    try:
        with _client() as client:
            count = 0
            for result in client.list_jobs(options):
                if result.error is not None:
                    raise click.ClickException(str(result.error))
                item = result.overview
                submitted = item.submitted_on.isoformat() if item.submitted_on else "-"
                print(f"{item.id}  {item.status.value:10s}  {item.no_of_entries:6d}  {submitted}")
                count += 1
                if count >= max_items:
                    break
    except VerifierError as e:
        raise click.ClickException(str(e))


@main.command()
def balance() -> None:
    """Show the account credit balance."""
    try:
        with _client() as client:
            result = client.get_balance()
    except VerifierError as e:
        raise click.ClickException(str(e))

    print("\n================ Credits =================")
    print(f"💳 Credit packs:    {result.credit_packs}")
    if result.free_credits is not None:
        print(f"🎁 Free credits:    {result.free_credits}")
    if result.free_credits_reset_in is not None:
        print(f"🔄 Reset in:        {result.free_credits_reset_in}")
    print("==========================================\n")


if __name__ == "__main__":
    main()
