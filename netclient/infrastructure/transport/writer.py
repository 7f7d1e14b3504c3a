"""Buffer writer for non-blocking transports."""

import logging

from ...domain.exceptions import TransportError
from ...domain.interfaces import ITransport
from ...domain.value_objects import WriteResult

_LOGGER = logging.getLogger(__name__)


class Writer:
    """Drives a byte buffer to completion over a non-blocking transport.

    Each transport write may accept fewer bytes than offered; the remainder
    is offered again immediately. Delivery is best-effort: when the transport
    reports an error the rest of the buffer is abandoned and a failed
    WriteResult is returned. Transport errors never propagate to the caller.

    Example:
        >>> result = Writer().write(transport, b"PING")
        >>> result.success, result.bytes_written
        (True, 4)
    """

    def write(self, transport: ITransport, data: bytes) -> WriteResult:
        """Write the whole buffer, tolerating partial writes.

        Args:
            transport: Connected transport
            data: Bytes to send

        Returns:
            WriteResult with the number of bytes the transport accepted
        """
        view = memoryview(bytes(data))
        total = len(view)
        written = 0

        while written < total:
            try:
                accepted = transport.write(view[written:].tobytes())
            except TransportError as err:
                _LOGGER.error(
                    "Write failed after %d/%d bytes: %s", written, total, err
                )
                return WriteResult(success=False, bytes_written=written, error=str(err))

            if accepted <= 0:
                # No progress would spin forever on a non-blocking transport
                _LOGGER.error(
                    "Transport accepted no bytes after %d/%d bytes", written, total
                )
                return WriteResult(
                    success=False,
                    bytes_written=written,
                    error="Transport accepted no bytes",
                )

            written += accepted
            if written < total:
                _LOGGER.debug("Short write: %d/%d bytes", written, total)

        return WriteResult(success=True, bytes_written=written)
