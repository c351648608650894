"""Account credit balance."""

from __future__ import annotations

from typing import Optional

from .cancellation import CancellationToken
from .codec import decode_balance, decode_with, read_json
from .errors import ProtocolError
from .models import Balance
from .transport import InvocationRequest, MultiplexedTransport


def get_balance(
    transport: MultiplexedTransport, token: Optional[CancellationToken] = None
) -> Balance:
    response = transport.invoke(
        InvocationRequest(method="GET", resource="credits/balance", token=token)
    )
    try:
        if response.status_code != 200:
            raise ProtocolError(response.status_code)
        return decode_with(decode_balance, read_json(response))
    finally:
        response.close()
