from __future__ import annotations

from web import create_app


def main() -> None:
    app = create_app()
    client = app.test_client()

    # new game
    resp = client.post("/api/reset")
    assert resp.status_code == 200, resp.data
    data = resp.get_json()
    assert "board" in data and data["move_count"] == 0

    # make a move and have AI reply
    resp = client.post("/api/move", json={"position": 4})
    assert resp.status_code == 200, resp.data
    data = resp.get_json()
    assert "ai_move" in data
    print("Smoke OK. AI replied:", data["ai_move"])


if __name__ == "__main__":
    main()
