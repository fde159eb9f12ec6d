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

"""Configuration entries of the SQL engine.

Every entry below registers itself in the global registry when this
module is imported. Keys live under ``engine.sql.``; internal entries are
settable like any other but do not appear in public listings.
"""

from .builder import build_conf
from .converters import ByteUnit, TimeUnit

OPTIMIZER_MAX_ITERATIONS = (
    build_conf("engine.sql.optimizer.maxIterations")
    .internal()
    .doc("The max number of iterations the optimizer and analyzer runs.")
    .int_conf()
    .check_value(lambda v: v > 0, "must be positive")
    .create_with_default(100)
)

COMPRESS_CACHED = (
    build_conf("engine.sql.inMemoryColumnarStorage.compressed")
    .internal()
    .doc(
        "When true, a compression codec is selected for each cached column "
        "based on statistics of the data."
    )
    .boolean_conf()
    .create_with_default(True)
)

COLUMN_BATCH_SIZE = (
    build_conf("engine.sql.inMemoryColumnarStorage.batchSize")
    .internal()
    .doc(
        "Controls the size of batches for columnar caching. Larger batch sizes "
        "improve memory utilization and compression, but risk running out of memory."
    )
    .int_conf()
    .check_value(lambda v: v > 0, "must be positive")
    .create_with_default(10000)
)

PREFER_SORTMERGEJOIN = (
    build_conf("engine.sql.join.preferSortMergeJoin")
    .internal()
    .doc("When true, prefer sort merge join over shuffle hash join.")
    .boolean_conf()
    .create_with_default(True)
)

AUTO_BROADCASTJOIN_THRESHOLD = (
    build_conf("engine.sql.autoBroadcastJoinThreshold")
    .doc(
        "Maximum size in bytes of a table that is broadcast to all workers "
        "when performing a join. Set to -1 to disable broadcasting."
    )
    .int_conf()
    .check_value(lambda v: v >= -1, "must be -1 or a non-negative size")
    .create_with_default(10 * 1024 * 1024)
)

DEFAULT_SIZE_IN_BYTES = (
    build_conf("engine.sql.defaultSizeInBytes")
    .internal()
    .doc(
        "The default table size used in query planning. Unless set, it is one "
        "more than engine.sql.autoBroadcastJoinThreshold, so a table is only "
        "broadcast when its size is known to be small enough."
    )
    .long_conf()
    .create_with_default(-1)
)

SHUFFLE_PARTITIONS = (
    build_conf("engine.sql.shuffle.partitions")
    .doc("The default number of partitions to use when shuffling data for joins or aggregations.")
    .int_conf()
    .check_value(lambda v: v > 0, "must be positive")
    .create_with_default(200)
)

SHUFFLE_TARGET_POSTSHUFFLE_INPUT_SIZE = (
    build_conf("engine.sql.adaptive.shuffle.targetPostShuffleInputSize")
    .doc("The target post-shuffle input size in bytes of a task.")
    .bytes_conf(ByteUnit.BYTE)
    .create_with_default(64 * 1024 * 1024)
)

ADAPTIVE_EXECUTION_ENABLED = (
    build_conf("engine.sql.adaptive.enabled")
    .doc("When true, enable adaptive query execution.")
    .boolean_conf()
    .create_with_default(False)
)

CASE_SENSITIVE = (
    build_conf("engine.sql.caseSensitive")
    .doc("Whether the query analyzer should be case sensitive or not.")
    .boolean_conf()
    .create_with_default(True)
)

PARQUET_COMPRESSION = (
    build_conf("engine.sql.parquet.compression.codec")
    .doc(
        "Sets the compression codec used when writing Parquet files. "
        "Acceptable values include: uncompressed, snappy, gzip, lzo."
    )
    .transform(str.lower)
    .check_values({"uncompressed", "snappy", "gzip", "lzo"})
    .string_conf()
    .create_with_default("snappy")
)

PARQUET_FILTER_PUSHDOWN_ENABLED = (
    build_conf("engine.sql.parquet.filterPushdown")
    .doc("Enables Parquet filter push-down optimization when set to true.")
    .boolean_conf()
    .create_with_default(True)
)

COLUMN_NAME_OF_CORRUPT_RECORD = (
    build_conf("engine.sql.columnNameOfCorruptRecord")
    .doc("The name of the internal column storing raw records that fail to parse.")
    .string_conf()
    .create_with_default("_corrupt_record")
)

BROADCAST_TIMEOUT = (
    build_conf("engine.sql.broadcastTimeout")
    .doc("Timeout for the broadcast wait time in broadcast joins.")
    .time_conf(TimeUnit.SECONDS)
    .create_with_default(5 * 60)
)

SCHEDULER_POOL = (
    build_conf("engine.sql.thriftserver.scheduler.pool")
    .doc("Set a fair scheduler pool for a client session.")
    .string_conf()
    .create_optional()
)

DEFAULT_DATA_SOURCE_NAME = (
    build_conf("engine.sql.sources.default")
    .doc("The default data source to use in input/output.")
    .string_conf()
    .create_with_default("parquet")
)

FILES_MAX_PARTITION_BYTES = (
    build_conf("engine.sql.files.maxPartitionBytes")
    .doc("The maximum number of bytes to pack into a single partition when reading files.")
    .bytes_conf(ByteUnit.BYTE)
    .create_with_default(128 * 1024 * 1024)
)

FILES_OPEN_COST_IN_BYTES = (
    build_conf("engine.sql.files.openCostInBytes")
    .internal()
    .doc(
        "The estimated cost to open a file, measured by the number of bytes "
        "that could be scanned in the same time."
    )
    .bytes_conf(ByteUnit.BYTE)
    .create_with_default(4 * 1024 * 1024)
)

CHECKPOINT_LOCATION = (
    build_conf("engine.sql.streaming.checkpointLocation")
    .doc("The default location for storing checkpoint data for continuously executing queries.")
    .string_conf()
    .create_optional()
)

VARIABLE_SUBSTITUTE_ENABLED = (
    build_conf("engine.sql.variable.substitute")
    .doc("This enables substitution using syntax like ${var} ${system:var} and ${env:var}.")
    .boolean_conf()
    .create_with_default(True)
)

VARIABLE_SUBSTITUTE_DEPTH = (
    build_conf("engine.sql.variable.substitute.depth")
    .doc("The maximum replacements the substitution engine will do.")
    .int_conf()
    .create_with_default(40)
)

FILE_SINK_LOG_CLEANUP_DELAY = (
    build_conf("engine.sql.streaming.fileSink.log.cleanupDelay")
    .internal()
    .doc("How long a file is guaranteed to be visible for all readers.")
    .time_conf(TimeUnit.MILLISECONDS)
    .create_with_default(10 * 60 * 1000)
)

WAREHOUSE_DIR = (
    build_conf("engine.sql.warehouse.dir")
    .doc("The default location for managed databases and tables.")
    .string_conf()
    .create_with_computed_default(
        lambda conf: f"{conf.get_string('engine.sql.sources.root', '.')}/warehouse"
    )
)
