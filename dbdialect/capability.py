"""Backend-independent feature flags a dialect may or may not support."""

import enum


class Capability(enum.Enum):
    """Named SQL behaviors or engine options; see ``Dialect.supports_capability``."""

    PARTITIONING = "partitioning"
    MULTITENANCY = "multitenancy"
    CLUSTERING = "clustering"
    ADVANCED_SECURITY = "advanced_security"
    JSON_STORE = "json_store"
    MERGE_STATEMENT = "merge_statement"
    BITWISE_OPERATIONS = "bitwise_operations"
    BOOLEAN_DATATYPE = "boolean_datatype"
    CASE_SENSITIVE_COMPARISON = "case_sensitive_comparison"
    CAST_AS_BIGINT = "cast_as_bigint"
    CLOB_COMPARISON = "clob_comparison"
    DISABLE_CONSTRAINT_CHECK = "disable_constraint_check"
    NON_BMP_CHARACTERS = "non_bmp_characters"
    ROW_LEVEL_LOCKING = "row_level_locking"
    UNIQUE_NAME_INDEX = "unique_name_index"
    DUMPSTER_TABLES = "dumpster_tables"
    LIMIT_CLAUSE = "limit_clause"
    ON_DUPLICATE_KEY = "on_duplicate_key"
    MULTITABLE_UPDATE = "multitable_update"
    REPLACE_INTO = "replace_into"
    READ_COMMITTED_ISOLATION = "read_committed_isolation"
