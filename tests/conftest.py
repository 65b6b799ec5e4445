import os
import tempfile

# Must run before taskflow.config builds its Settings
_db_dir = tempfile.mkdtemp(prefix="taskflow-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_db_dir, 'test.sqlite')}"
os.environ["TIMEZONE"] = ""
