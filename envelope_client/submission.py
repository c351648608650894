"""Job submission: inline entries or a streamed file."""

from __future__ import annotations

import logging
import os
from typing import BinaryIO, Optional, Sequence, Union

from urllib3.fields import RequestField
from urllib3.filepost import encode_multipart_formdata

from .codec import (
    JSON_CONTENT_TYPE,
    decode_job,
    decode_with,
    encode_file_settings,
    encode_validation_request,
    guess_content_type,
    read_json,
    wait_time_param,
)
from .errors import SubmissionError, UnresolvedContentTypeError
from .models import EntryInput, FileSubmissionOptions, Job, SubmissionOptions
from .transport import InvocationRequest, MultiplexedTransport

logger = logging.getLogger(__name__)

JOBS_RESOURCE = "email-validations"

FileSource = Union[str, os.PathLike, BinaryIO]


def submit_entries(
    transport: MultiplexedTransport,
    entries: Union[EntryInput, Sequence[EntryInput]],
    options: Optional[SubmissionOptions] = None,
) -> Job:
    """Submit one or more addresses; returns the (possibly still running) job."""
    body = encode_validation_request(entries, options)
    request = InvocationRequest(
        method="POST",
        resource=JOBS_RESOURCE,
        params=wait_time_param(options.submission_wait_time if options else None),
        body=body,
        token=options.token if options else None,
    )
    return _submit(transport, request)


def resolve_content_type(
    filename: Optional[str], explicit: Optional[str] = None
) -> str:
    """Pick the MIME type for a file upload.

    An explicit type always wins. Otherwise the extension decides; a named
    file with an unrecognised extension is an error, while an anonymous
    stream is sent as plain text.
    """
    if explicit:
        return explicit
    if not filename:
        return "text/plain"

    content_type = guess_content_type(filename)
    if content_type is None:
        raise UnresolvedContentTypeError(
            f"Cannot guess the content type for the provided file {filename}, "
            "please specify it through the file options"
        )
    return content_type


def _source_name(source: FileSource) -> Optional[str]:
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    name = getattr(source, "name", None)
    return name if isinstance(name, str) else None


def _read_source(source: FileSource) -> bytes:
    if isinstance(source, (str, os.PathLike)):
        with open(source, "rb") as handle:
            return handle.read()
    content = source.read()
    if isinstance(content, str):
        content = content.encode("utf-8")
    return content


def submit_file(
    transport: MultiplexedTransport,
    source: FileSource,
    file_options: Optional[FileSubmissionOptions] = None,
    options: Optional[SubmissionOptions] = None,
) -> Job:
    """Submit a file of addresses as a multipart upload."""
    file_options = file_options or FileSubmissionOptions()

    # Resolve the content type before touching the data
    filename = _source_name(source)
    content_type = resolve_content_type(filename, file_options.content_type)
    content = _read_source(source)

    input_part = RequestField(
        name="inputFile",
        data=content,
        filename=os.path.basename(filename) if filename else "input",
    )
    input_part.make_multipart(content_type=content_type)

    settings_part = RequestField(
        name="settings", data=encode_file_settings(file_options, options)
    )
    settings_part.make_multipart(content_type=JSON_CONTENT_TYPE)

    body, multipart_type = encode_multipart_formdata([input_part, settings_part])

    request = InvocationRequest(
        method="POST",
        resource=JOBS_RESOURCE,
        params=wait_time_param(options.submission_wait_time if options else None),
        body=body,
        headers={"Content-Type": multipart_type},
        token=options.token if options else None,
    )
    return _submit(transport, request)


def _submit(transport: MultiplexedTransport, request: InvocationRequest) -> Job:
    response = transport.invoke(request)
    try:
        if response.status_code not in (200, 202):
            raise SubmissionError(
                response.status_code,
                f"Job submission failed (HTTP status code: {response.status_code})",
            )
        job = decode_with(decode_job, read_json(response))
    finally:
        response.close()

    logger.info(
        "Submitted job %s (%s, %d entries)",
        job.overview.id,
        job.overview.status.value,
        job.overview.no_of_entries,
    )
    return job
