# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Typed, per-session accessors for the engine's configuration entries.

Engine code reads settings through these properties rather than through
raw keys. Each property resolves against the session's current overrides
on every access, so values set later are always visible.

For settings without an accessor, read the session directly:
    settings.conf.get_typed(entries.CASE_SENSITIVE)
"""

from . import entries
from .store import SessionConf


class EngineSettings:
    """Typed view over one session's :class:`SessionConf`."""

    def __init__(self, conf: SessionConf | None = None) -> None:
        self.conf = SessionConf() if conf is None else conf

    @property
    def optimizer_max_iterations(self) -> int:
        return self.conf.get_typed(entries.OPTIMIZER_MAX_ITERATIONS)

    @property
    def use_compression(self) -> bool:
        return self.conf.get_typed(entries.COMPRESS_CACHED)

    @property
    def column_batch_size(self) -> int:
        return self.conf.get_typed(entries.COLUMN_BATCH_SIZE)

    @property
    def prefer_sort_merge_join(self) -> bool:
        return self.conf.get_typed(entries.PREFER_SORTMERGEJOIN)

    @property
    def auto_broadcast_join_threshold(self) -> int:
        """Maximum table size in bytes for broadcast joins, -1 when disabled."""
        return self.conf.get_typed(entries.AUTO_BROADCASTJOIN_THRESHOLD)

    @property
    def default_size_in_bytes(self) -> int:
        """Table size assumed by the planner when statistics are missing.

        Unless set explicitly, this is one more than the current broadcast
        threshold, recomputed on every read.
        """
        return self.conf.get_typed(
            entries.DEFAULT_SIZE_IN_BYTES,
            self.auto_broadcast_join_threshold + 1,
        )

    @property
    def num_shuffle_partitions(self) -> int:
        return self.conf.get_typed(entries.SHUFFLE_PARTITIONS)

    @property
    def target_post_shuffle_input_size(self) -> int:
        return self.conf.get_typed(entries.SHUFFLE_TARGET_POSTSHUFFLE_INPUT_SIZE)

    @property
    def adaptive_execution_enabled(self) -> bool:
        return self.conf.get_typed(entries.ADAPTIVE_EXECUTION_ENABLED)

    @property
    def case_sensitive_analysis(self) -> bool:
        return self.conf.get_typed(entries.CASE_SENSITIVE)

    @property
    def parquet_compression_codec(self) -> str:
        return self.conf.get_typed(entries.PARQUET_COMPRESSION)

    @property
    def parquet_filter_push_down(self) -> bool:
        return self.conf.get_typed(entries.PARQUET_FILTER_PUSHDOWN_ENABLED)

    @property
    def column_name_of_corrupt_record(self) -> str:
        return self.conf.get_typed(entries.COLUMN_NAME_OF_CORRUPT_RECORD)

    @property
    def broadcast_timeout(self) -> int:
        """Broadcast wait timeout in seconds."""
        return self.conf.get_typed(entries.BROADCAST_TIMEOUT)

    @property
    def scheduler_pool(self) -> str | None:
        return self.conf.get_typed(entries.SCHEDULER_POOL, None)

    @property
    def default_data_source_name(self) -> str:
        return self.conf.get_typed(entries.DEFAULT_DATA_SOURCE_NAME)

    @property
    def files_max_partition_bytes(self) -> int:
        return self.conf.get_typed(entries.FILES_MAX_PARTITION_BYTES)

    @property
    def files_open_cost_in_bytes(self) -> int:
        return self.conf.get_typed(entries.FILES_OPEN_COST_IN_BYTES)

    @property
    def checkpoint_location(self) -> str:
        """Checkpoint directory; raises KeyNotFoundError when not set."""
        return self.conf.get_typed(entries.CHECKPOINT_LOCATION)

    @property
    def variable_substitute_enabled(self) -> bool:
        return self.conf.get_typed(entries.VARIABLE_SUBSTITUTE_ENABLED)

    @property
    def variable_substitute_depth(self) -> int:
        return self.conf.get_typed(entries.VARIABLE_SUBSTITUTE_DEPTH)

    @property
    def file_sink_log_cleanup_delay(self) -> int:
        """Cleanup delay in milliseconds."""
        return self.conf.get_typed(entries.FILE_SINK_LOG_CLEANUP_DELAY)

    @property
    def warehouse_dir(self) -> str:
        return self.conf.get_typed(entries.WAREHOUSE_DIR)
