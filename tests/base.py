import os
import shutil
import tempfile
import unittest
from contextlib import ExitStack

from fastapi.testclient import TestClient

from buspass.config import Settings
from buspass.main import create_app


class AppTestCase(unittest.TestCase):
    """Runs the app against a throwaway SQLite database and upload directory"""

    start_app = True

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.tmpdir, ignore_errors=True)

        self.settings = Settings(
            DATABASE_URL=f"sqlite:///{os.path.join(self.tmpdir, 'test.db')}",
            UPLOAD_DIR=os.path.join(self.tmpdir, "uploads"),
            PASS_ID_PREFIX="TSRTC",
            PASS_ID_MAX_ATTEMPTS=3,
        )
        self.app = create_app(self.settings)
        self.store = self.app.state.store

        stack = ExitStack()
        self.addCleanup(stack.close)
        if self.start_app:
            self.client = stack.enter_context(TestClient(self.app))
        else:
            self.client = TestClient(self.app)

    def session(self):
        db = self.store.session()
        self.addCleanup(db.close)
        return db

    def apply(self, files=None, **fields):
        resp = self.client.post("/apply", data=fields, files=files)
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()
