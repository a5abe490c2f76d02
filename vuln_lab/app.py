"""VulnLab: deliberately vulnerable web server for SQLiProbe testing.

Uses a real SQLite database. Endpoints:
  /sqli    raw string interpolation, leaks SQL errors, honours SLEEP(n)
  /strict  same query, but errors surface only as a bare HTTP 500
  /safe    parameterised query
  /notice  parameterised query on a page that always says "Warning"
Parameters are read from the query string, form body or JSON body.
"""

import os
import re
import time
import sqlite3

from flask import Flask, request, render_template_string, g, abort

app = Flask(__name__)
app.config.setdefault("DATABASE", os.path.join(os.path.dirname(__file__), "vulnlab.db"))

# ── Database helpers ────────────────────────────────────────────

def get_db():
    """Get a per-request SQLite connection."""
    if "db" not in g:
        g.db = sqlite3.connect(app.config["DATABASE"])
        g.db.row_factory = sqlite3.Row
    return g.db


@app.teardown_appcontext
def close_db(exc):
    db = g.pop("db", None)
    if db:
        db.close()


def init_db(path=None):
    """Create tables and seed data."""
    if path:
        app.config["DATABASE"] = path
    conn = sqlite3.connect(app.config["DATABASE"])
    cur = conn.cursor()
    cur.execute("DROP TABLE IF EXISTS users")
    cur.execute("""
        CREATE TABLE users (
            id    INTEGER PRIMARY KEY,
            name  TEXT NOT NULL,
            email TEXT NOT NULL,
            role  TEXT DEFAULT 'user'
        )
    """)
    seed = [
        (1, "admin", "admin@vulnlab.local", "admin"),
        (2, "alice", "alice@vulnlab.local", "user"),
        (3, "bob",   "bob@vulnlab.local",   "user"),
        (4, "charlie", "charlie@vulnlab.local", "moderator"),
    ]
    cur.executemany("INSERT INTO users VALUES (?,?,?,?)", seed)
    conn.commit()
    conn.close()


def param(name: str) -> str:
    """Query string, form body, then JSON body (with or without content type)."""
    if name in request.values:
        return request.values[name]
    body = request.get_json(force=True, silent=True)
    if isinstance(body, dict) and body.get(name) is not None:
        return str(body[name])
    return ""


def rows_html(rows) -> str:
    if not rows:
        return "<p>No user found.</p>"
    out = "<table><tr><th>ID</th><th>Name</th><th>Email</th><th>Role</th></tr>"
    for row in rows:
        out += f"<tr><td>{row['id']}</td><td>{row['name']}</td><td>{row['email']}</td><td>{row['role']}</td></tr>"
    return out + "</table>"


# ── Shared HTML layout ──────────────────────────────────────────

_LAYOUT = """<!DOCTYPE html>
<html><head><title>VulnLab — {{ title }}</title></head>
<body>
<h1>VulnLab</h1>
<p><a href="/">← Home</a></p>
<h2>{{ title }}</h2>
{{ content|safe }}
</body></html>
"""


def page(title, content):
    return render_template_string(_LAYOUT, title=title, content=content)


@app.route("/")
def home():
    return page("Home", """
    <ul>
        <li><a href="/sqli?id=1">SQL Injection (verbose errors)</a></li>
        <li><a href="/strict?id=1">SQL Injection (HTTP 500 only)</a></li>
        <li><a href="/safe?id=1">Parameterised lookup</a></li>
        <li><a href="/notice?id=1">Parameterised lookup with a warning banner</a></li>
    </ul>
    """)


# ══════════════════════════════════════════════════════════════════
#  SQLi — SQL Injection (real SQLite)
# ══════════════════════════════════════════════════════════════════

@app.route("/sqli", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
def sqli():
    id_val = param("id")
    if not id_val:
        return page("SQL Injection", "<p>Provide a user ID.</p>")

    # VULNERABLE: Raw string interpolation in SQL query
    query = f"SELECT * FROM users WHERE id = '{id_val}'"
    try:
        result_html = rows_html(get_db().execute(query).fetchall())
    except sqlite3.Error as e:
        # VULNERABLE: Leaking SQL error messages
        result_html = f'<p style="color:red">SQL Error: {e}</p>'

    # Simulate time-based: if SLEEP(n) appears, actually sleep
    sleep_match = re.search(r"SLEEP\((\d+)\)", id_val, re.IGNORECASE)
    if sleep_match:
        time.sleep(min(int(sleep_match.group(1)), 10))

    return page("SQL Injection", result_html)


@app.route("/strict", methods=["GET", "POST"])
def strict():
    id_val = param("id")
    query = f"SELECT * FROM users WHERE id = '{id_val}'"
    try:
        rows = get_db().execute(query).fetchall()
    except sqlite3.Error:
        abort(500)
    return page("Lookup", rows_html(rows))


@app.route("/safe", methods=["GET", "POST"])
def safe():
    rows = get_db().execute("SELECT * FROM users WHERE id = ?", (param("id"),)).fetchall()
    return page("Lookup", rows_html(rows))


@app.route("/notice", methods=["GET", "POST"])
def notice():
    rows = get_db().execute("SELECT * FROM users WHERE id = ?", (param("id"),)).fetchall()
    return page("Lookup", "<p>Warning: deprecated endpoint, use /safe.</p>" + rows_html(rows))


# ══════════════════════════════════════════════════════════════════
#  Main
# ══════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    init_db()
    print("\n  VulnLab starting on http://0.0.0.0:5000\n")
    app.run(host="0.0.0.0", port=5000, debug=True, threaded=True)
