import os
import tempfile

# 在 import app.* 之前設定，避免連到真的 Postgres
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "schedule-builder-test-logs"))
