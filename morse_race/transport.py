"""
Byte sources for the game loop, and the loop itself.

SerialTransport   live device over USB serial (pyserial), 8N1, no flow control
ReplayTransport   bytes from a capture file, for offline replay

Both return b"" from read() when nothing is pending. The loop is single
threaded: every chunk is fed to the LineReader one byte at a time, in order.
"""

import serial

READ_TIMEOUT = 0.1   # seconds; replaces busy-polling a non-blocking port
READ_CHUNK   = 256


class TransportError(Exception):
    pass


class SerialTransport:
    def __init__(self, port, baudrate):
        self.port = port
        self.baudrate = baudrate
        self.exhausted = False
        try:
            self._serial = serial.Serial(
                port, baudrate,
                bytesize=serial.EIGHTBITS,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                xonxoff=False,
                rtscts=False,
                timeout=READ_TIMEOUT,
            )
        except (serial.SerialException, ValueError, OSError) as e:
            raise TransportError(str(e)) from e

    def read(self) -> bytes:
        try:
            return self._serial.read(READ_CHUNK)
        except serial.SerialException as e:
            raise TransportError(str(e)) from e

    def close(self):
        if self._serial:
            try:
                self._serial.close()
            finally:
                self._serial = None


class ReplayTransport:
    def __init__(self, path, chunk_size=READ_CHUNK):
        self.path = path
        self.chunk_size = chunk_size
        self.exhausted = False
        try:
            self._file = open(path, "rb")
        except OSError as e:
            raise TransportError(str(e)) from e

    def read(self) -> bytes:
        if self.exhausted:
            return b""
        try:
            data = self._file.read(self.chunk_size)
        except OSError as e:
            raise TransportError(str(e)) from e
        if not data:
            self.exhausted = True
        return data

    def close(self):
        self.exhausted = True
        if self._file:
            self._file.close()
            self._file = None


def pump(transport, reader, coordinator):
    """
    Run until the transport is exhausted or the user interrupts.
    Empty lines are not forwarded to the coordinator.
    """
    try:
        while not transport.exhausted:
            for byte in transport.read():
                length = reader.feed(byte)
                if length:
                    coordinator.on_line(reader.line())
    except KeyboardInterrupt:
        pass
    finally:
        transport.close()
