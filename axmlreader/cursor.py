from struct import Struct

from loguru import logger

from .errors import OutOfBoundsError

_U16 = Struct('<H')
_U32 = Struct('<L')
_I32 = Struct('<l')
_F32 = Struct('<f')


class ByteCursor:
    """
    Read position over an in-memory buffer.

    All values are little endian. Every read and seek is checked against the
    buffer size and raises [OutOfBoundsError][axmlreader.errors.OutOfBoundsError]
    instead of returning short data, so a corrupted size field can never walk
    past the end of the buffer.
    """

    def __init__(self, data: bytes) -> None:
        self._data = memoryview(data)
        self.size = len(self._data)
        self._pos = 0
        self._mark = None

    def __repr__(self):
        return "<ByteCursor pos=0x{:08x} size=0x{:08x}>".format(
            self._pos, self.size
        )

    def tell(self) -> int:
        return self._pos

    def remaining(self) -> int:
        return self.size - self._pos

    def seek(self, offset: int) -> None:
        """
        Move to an absolute offset.

        Seeking to the very end of the buffer is allowed, as nothing is read.

        :param offset: the absolute offset inside the buffer
        :raises OutOfBoundsError: if the offset is outside of the buffer
        """
        if offset < 0 or offset > self.size:
            raise OutOfBoundsError(
                "Can not seek to 0x{:08x}, buffer size is 0x{:08x}".format(
                    offset, self.size
                )
            )
        self._pos = offset

    def mark(self) -> None:
        self._mark = self._pos

    def reset(self) -> None:
        if self._mark is None:
            logger.warning("reset() called without mark(), staying in place")
            return
        self._pos = self._mark
        self._mark = None

    def read(self, length: int) -> bytes:
        end = self._pos + length
        if length < 0 or end > self.size:
            raise OutOfBoundsError(
                "Can not read {} bytes at 0x{:08x}, buffer size is 0x{:08x}".format(
                    length, self._pos, self.size
                )
            )
        data = self._data[self._pos:end].tobytes()
        self._pos = end
        return data

    def _unpack(self, fmt: Struct):
        if self._pos + fmt.size > self.size:
            raise OutOfBoundsError(
                "Can not read {} bytes at 0x{:08x}, buffer size is 0x{:08x}".format(
                    fmt.size, self._pos, self.size
                )
            )
        (value,) = fmt.unpack_from(self._data, self._pos)
        self._pos += fmt.size
        return value

    def read_u16(self) -> int:
        return self._unpack(_U16)

    def read_u32(self) -> int:
        return self._unpack(_U32)

    def read_i32(self) -> int:
        return self._unpack(_I32)

    def read_f32(self) -> float:
        return self._unpack(_F32)

    def peek_u32(self) -> int:
        """
        Read the next u32 without consuming it.
        Used to look at the type of a chunk before handing it to its decoder.
        """
        self.mark()
        try:
            return self.read_u32()
        finally:
            self.reset()
