import io
import typing as ty


class StreamChannel(io.RawIOBase):
    """Adapts any binary stream into a raw, `readinto`-style readable channel.

    Closing the channel closes the wrapped stream.
    """

    def __init__(self, stream: ty.BinaryIO):
        super().__init__()
        self._stream = stream

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> ty.Optional[int]:  # type: ignore[override]
        if self.closed:
            raise ValueError("I/O operation on closed channel.")
        readinto = getattr(self._stream, "readinto", None)
        if readinto is not None:
            return readinto(buffer)
        data = self._stream.read(len(buffer))
        n_read = len(data)
        memoryview(buffer).cast("B")[:n_read] = data
        return n_read

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._stream.close()
        finally:
            super().close()
