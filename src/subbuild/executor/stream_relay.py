"""
Concurrent relay of a subprocess's output streams.

A child writing to several pipes blocks as soon as any one pipe buffer is
full, so every pipe has to be drained at the same time. The first channel
is drained on the calling thread; each further channel gets its own worker
thread. All workers are joined before the caller goes on to wait for the
child.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import BinaryIO, Callable, Dict, List, Optional, Sequence, TextIO

from ..validation import StreamReadError

logger = logging.getLogger(__name__)


@dataclass
class RelayChannel:
    """One output stream of the child and where its lines go."""

    name: str
    source: BinaryIO
    sink: TextIO


def _strip_line_ending(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


class StreamRelay:
    """
    Relays lines from byte streams to text sinks, prefixing every line.

    Lines of one channel keep their order; lines of different channels
    interleave in whatever order they arrive.
    """

    def __init__(self, prefix: str, encoding: str = "utf-8",
                 thread_name_prefix: str = "StreamRelay"):
        self.prefix = prefix
        self.encoding = encoding
        self.thread_name_prefix = thread_name_prefix

    def drain(self, channel: RelayChannel) -> int:
        """
        Read `channel.source` to end-of-stream, relaying every line.

        Returns:
            Number of lines relayed

        Raises:
            StreamReadError: On a read failure, a line that does not decode,
                or a sink that cannot take the line. The source is closed
                first so the child gets a broken pipe instead of blocking on
                a full buffer.
        """
        count = 0
        try:
            while True:
                try:
                    raw = channel.source.readline()
                except (OSError, ValueError) as e:
                    raise StreamReadError(channel.name, f"{type(e).__name__}: {e}") from e
                if not raw:
                    break
                try:
                    line = raw.decode(self.encoding)
                except UnicodeDecodeError as e:
                    raise StreamReadError(channel.name, f"line {count + 1} is not valid {self.encoding}: {e}") from e

                try:
                    channel.sink.write(f"{self.prefix}{_strip_line_ending(line)}\n")
                    channel.sink.flush()
                except (OSError, UnicodeError) as e:
                    raise StreamReadError(
                        channel.name, f"line {count + 1} could not be relayed: {type(e).__name__}: {e}"
                    ) from e
                count += 1
        except StreamReadError:
            logger.error(f"Relay of {channel.name} stopped after {count} lines")
            channel.source.close()
            raise

        logger.debug(f"Relayed {count} lines from {channel.name}")
        return count

    def relay(self, channels: Sequence[RelayChannel],
              abort: Optional[Callable[[], None]] = None) -> Dict[str, int]:
        """
        Drain all channels concurrently.

        channels[0] is drained on the calling thread, every other channel on
        a dedicated worker. Returns the number of lines relayed per channel
        name once every channel has reached end-of-stream.

        Args:
            channels: Streams to drain, inline channel first
            abort: Called as soon as any channel fails. It must make the
                remaining sources reach end-of-stream (e.g. by killing the
                writer); the workers are then joined before the error is
                raised. Without it, failed relays leave workers unjoined.
        """
        if not channels:
            return {}

        inline, *others = channels
        counts: Dict[str, int] = {}
        if not others:
            try:
                counts[inline.name] = self.drain(inline)
            except BaseException:
                if abort is not None:
                    abort()
                raise
            return counts

        pool = ThreadPoolExecutor(
            max_workers=len(others),
            thread_name_prefix=self.thread_name_prefix,
        )
        futures: List[Future] = [pool.submit(self.drain, channel) for channel in others]
        if abort is not None:
            # A failed worker must not leave the inline drain blocked on a live writer.
            def _abort_on_failure(future: Future) -> None:
                if future.exception() is not None:
                    abort()

            for future in futures:
                future.add_done_callback(_abort_on_failure)

        try:
            counts[inline.name] = self.drain(inline)
            for channel, future in zip(others, futures):
                counts[channel.name] = future.result()
        except BaseException:
            if abort is None:
                pool.shutdown(wait=False)
                raise
            try:
                abort()
            finally:
                pool.shutdown(wait=True)
            raise

        pool.shutdown(wait=True)
        return counts
