"""Fixed SQL used by schema and table introspection."""

SCHEMA_TABLES_QUERY = """
SELECT
  table_name,
  table_schema,
  table_type
FROM information_schema.tables
WHERE table_schema = $1
"""

SCHEMA_COLUMNS_QUERY = """
SELECT
  table_name,
  column_name,
  data_type,
  is_nullable,
  column_default,
  character_maximum_length,
  numeric_precision,
  numeric_scale,
  ordinal_position
FROM information_schema.columns
WHERE table_schema = $1
ORDER BY table_name, ordinal_position
"""

SCHEMA_CONSTRAINTS_QUERY = """
SELECT
  tc.table_name,
  tc.constraint_name,
  tc.constraint_type,
  kcu.column_name,
  ccu.table_name AS foreign_table_name,
  ccu.column_name AS foreign_column_name
FROM information_schema.table_constraints AS tc
LEFT JOIN information_schema.key_column_usage AS kcu
  ON tc.constraint_name = kcu.constraint_name
  AND tc.table_schema = kcu.table_schema
LEFT JOIN information_schema.constraint_column_usage AS ccu
  ON tc.constraint_name = ccu.constraint_name
  AND tc.table_schema = ccu.table_schema
WHERE tc.table_schema = $1
ORDER BY tc.table_name, tc.constraint_name
"""

TABLE_QUERY = """
SELECT
  t.table_name,
  t.table_schema,
  t.table_type,
  obj_description(c.oid) AS table_comment
FROM information_schema.tables AS t
LEFT JOIN pg_catalog.pg_namespace AS n
  ON n.nspname = t.table_schema
LEFT JOIN pg_catalog.pg_class AS c
  ON c.relname = t.table_name
  AND c.relnamespace = n.oid
WHERE t.table_schema = $1 AND t.table_name = $2
"""

TABLE_COLUMNS_QUERY = """
SELECT
  c.column_name,
  c.data_type,
  c.is_nullable,
  c.column_default,
  c.character_maximum_length,
  c.numeric_precision,
  c.numeric_scale,
  c.ordinal_position,
  col_description(pgc.oid, c.ordinal_position) AS column_comment
FROM information_schema.columns AS c
LEFT JOIN pg_catalog.pg_namespace AS pgn
  ON pgn.nspname = c.table_schema
LEFT JOIN pg_catalog.pg_class AS pgc
  ON pgc.relname = c.table_name
  AND pgc.relnamespace = pgn.oid
WHERE c.table_schema = $1 AND c.table_name = $2
ORDER BY c.ordinal_position
"""

TABLE_CONSTRAINTS_QUERY = """
SELECT
  tc.constraint_name,
  tc.constraint_type,
  kcu.column_name,
  ccu.table_name AS foreign_table_name,
  ccu.column_name AS foreign_column_name,
  rc.match_option,
  rc.update_rule,
  rc.delete_rule
FROM information_schema.table_constraints AS tc
LEFT JOIN information_schema.key_column_usage AS kcu
  ON tc.constraint_name = kcu.constraint_name
  AND tc.table_schema = kcu.table_schema
LEFT JOIN information_schema.constraint_column_usage AS ccu
  ON tc.constraint_name = ccu.constraint_name
  AND tc.table_schema = ccu.table_schema
LEFT JOIN information_schema.referential_constraints AS rc
  ON tc.constraint_name = rc.constraint_name
  AND tc.table_schema = rc.constraint_schema
WHERE tc.table_schema = $1 AND tc.table_name = $2
ORDER BY tc.constraint_type, tc.constraint_name
"""

TABLE_INDEXES_QUERY = """
SELECT
  i.relname AS index_name,
  a.attname AS column_name,
  ix.indisunique AS is_unique,
  ix.indisprimary AS is_primary,
  am.amname AS index_type
FROM pg_catalog.pg_class AS i
JOIN pg_catalog.pg_index AS ix ON i.oid = ix.indexrelid
JOIN pg_catalog.pg_class AS t ON t.oid = ix.indrelid
JOIN pg_catalog.pg_namespace AS n ON n.oid = t.relnamespace
JOIN pg_catalog.pg_attribute AS a
  ON a.attrelid = t.oid
  AND a.attnum = ANY(ix.indkey)
JOIN pg_catalog.pg_am AS am ON i.relam = am.oid
WHERE n.nspname = $1 AND t.relname = $2
ORDER BY i.relname, a.attnum
"""

TABLE_SIZE_QUERY = """
SELECT
  pg_stat_get_live_tuples(c.oid) AS estimated_row_count,
  pg_relation_size(c.oid) AS table_size_bytes,
  pg_size_pretty(pg_relation_size(c.oid)) AS table_size_pretty,
  pg_total_relation_size(c.oid) - pg_relation_size(c.oid) AS index_size_bytes,
  pg_size_pretty(pg_total_relation_size(c.oid) - pg_relation_size(c.oid))
    AS index_size_pretty,
  pg_total_relation_size(c.oid) AS total_size_bytes,
  pg_size_pretty(pg_total_relation_size(c.oid)) AS total_size_pretty
FROM pg_catalog.pg_class AS c
JOIN pg_catalog.pg_namespace AS n ON n.oid = c.relnamespace
WHERE n.nspname = $1 AND c.relname = $2
"""
