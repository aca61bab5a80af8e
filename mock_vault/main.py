"""Mock Sheety vault: serves the user database and accepts admin row edits"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException

STUB_FILE = Path(__file__).resolve().parent / "vault_stub" / "user_database.json"
COLLECTION = "userDatabase"


def load_stub_rows() -> List[Dict[str, Any]]:
    return json.loads(STUB_FILE.read_text(encoding="utf-8"))[COLLECTION]


def create_mock_vault(rows: Optional[List[Dict[str, Any]]] = None) -> FastAPI:
    app = FastAPI(title="Mock Vault", version="1.0.0")
    app.state.rows = copy.deepcopy(rows) if rows is not None else load_stub_rows()
    app.state.available = True

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get(f"/onlineBanking/{COLLECTION}")
    def get_rows():
        if not app.state.available:
            raise HTTPException(status_code=503, detail="vault offline")
        return {COLLECTION: app.state.rows}

    @app.put(f"/onlineBanking/{COLLECTION}/{{row_id}}")
    def update_row(row_id: int, body: Dict[str, Dict[str, Any]]):
        """Sheety-style edit: {"userDatabase": {...changed columns...}}"""
        for row in app.state.rows:
            if row.get("id") == row_id:
                row.update(body.get(COLLECTION, {}))
                return {COLLECTION: row}
        raise HTTPException(status_code=404, detail="row not found")

    return app


app = create_mock_vault()
