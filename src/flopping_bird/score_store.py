"""
score_store.py: SQLite persistence of the best score on record.
"""

import sqlite3

DB_FILE = "flopping_bird.db"


class BestScoreStore:
    """Keeps one integer: the best score ever reached on this machine."""
    def __init__(self, db_file: str = DB_FILE):
        self.conn = sqlite3.connect(db_file)
        self.cur = self.conn.cursor()
        self.setup()

    def setup(self):
        """Creates the table and its single row if they don't exist."""
        self.cur.execute("""
            CREATE TABLE IF NOT EXISTS BestScore (
                id INTEGER PRIMARY KEY CHECK (id = 1),
                best INTEGER NOT NULL DEFAULT 0
            )
        """)
        self.cur.execute("INSERT OR IGNORE INTO BestScore (id, best) VALUES (1, 0)")
        self.conn.commit()

    def load(self) -> int:
        self.cur.execute("SELECT best FROM BestScore WHERE id=1")
        row = self.cur.fetchone()
        return row[0] if row else 0

    def save(self, score: int):
        """Stores score if it beats the recorded best."""
        self.cur.execute(
            "UPDATE BestScore SET best = MAX(best, ?) WHERE id=1", (int(score),))
        self.conn.commit()

    def close(self):
        self.conn.close()
