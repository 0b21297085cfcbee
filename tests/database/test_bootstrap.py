from hrms.database.bootstrap import _strip_create_db_and_use, _strip_line_comments, iter_sql_statements
from hrms.main import SCHEMA_PATH


def test_iter_sql_statements_keeps_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b');\nINSERT INTO t VALUES (\"c;d\");\nSELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'INSERT INTO t VALUES ("c;d")',
        "SELECT 1",
    ]


def test_iter_sql_statements_handles_escaped_quote():
    sql = r"INSERT INTO t VALUES ('it\'s;fine'); SELECT 2;"

    assert len(list(iter_sql_statements(sql))) == 2


def test_strip_helpers_drop_database_selection_and_comments():
    sql = "CREATE DATABASE foo;\nUSE foo;\n-- note\nCREATE TABLE x (id INT);"

    cleaned = _strip_line_comments(_strip_create_db_and_use(sql))

    assert list(iter_sql_statements(cleaned)) == ["CREATE TABLE x (id INT)"]


def test_schema_file_defines_every_table():
    sql = _strip_line_comments(_strip_create_db_and_use(SCHEMA_PATH.read_text(encoding="utf-8")))
    statements = list(iter_sql_statements(sql))

    tables = [s.split()[5] for s in statements if s.upper().startswith("CREATE TABLE IF NOT EXISTS")]
    assert tables == [
        "departments",
        "employees",
        "attendance_records",
        "leave_balances",
        "leave_requests",
        "payrolls",
    ]
