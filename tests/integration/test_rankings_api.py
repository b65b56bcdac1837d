"""
Integration tests for the rankings API.
"""
from fastapi.testclient import TestClient


def post(client, video_id, view_count, likes, dislikes, title="Some video"):
    return client.post(
        "/v1/observations",
        json={
            "id": video_id,
            "title": title,
            "viewCount": view_count,
            "likes": likes,
            "dislikes": dislikes,
        },
    )


class TestObservationsAPI:
    def test_post_observation(self, test_client: TestClient):
        response = post(test_client, "dQw4w9WgXcQ", 1500, 10, 4, title="Song")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "dQw4w9WgXcQ"
        assert data["ratio"] == 2.5
        assert data["retained"] is True
        assert data["rankings"] == [
            {
                "lower": 1000,
                "upper": 10000,
                "label": "1,000 - 10,000 views",
                "entries": [
                    {
                        "position": 1,
                        "id": "dQw4w9WgXcQ",
                        "title": "Song",
                        "ratio": 2.5,
                        "view_count": 1500,
                        "url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
                    }
                ],
            }
        ]

    def test_no_observation(self, test_client: TestClient, kv_store):
        response = test_client.post("/v1/observations")

        assert response.status_code == 204
        assert kv_store.get_item("us-yt-ratio") is None

    def test_ineligible_observation(self, test_client: TestClient, kv_store):
        response = post(test_client, "v", "12 k", 10, 4)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INELIGIBLE_RECORD"
        assert kv_store.get_item("us-yt-ratio") is None

    def test_count_beyond_float_range(self, test_client: TestClient, kv_store):
        response = post(test_client, "v", 10 ** 400, 10, 4)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INELIGIBLE_RECORD"
        assert kv_store.get_item("us-yt-ratio") is None

    def test_retention_cap(self, test_client: TestClient):
        post(test_client, "a", 200, 90, 1)
        post(test_client, "b", 300, 80, 1)

        response = post(test_client, "c", 400, 1, 1)

        data = response.json()
        assert data["retained"] is False
        assert data["removed_ids"] == ["c"]
        assert [e["id"] for e in data["rankings"][0]["entries"]] == ["a", "b"]


class TestRankingsAPI:
    def test_empty_rankings(self, test_client: TestClient):
        response = test_client.get("/v1/rankings")

        assert response.status_code == 200
        assert response.json() == {"rankings": [], "total_records": 0}

    def test_rankings_grouped_by_views(self, test_client: TestClient):
        post(test_client, "A", 150, 10, 2)
        post(test_client, "B", 150, 20, 4)
        post(test_client, "C", 5000, 9, 1)
        post(test_client, "tiny", 50, 100, 1)

        data = test_client.get("/v1/rankings").json()

        assert data["total_records"] == 4
        assert [r["label"] for r in data["rankings"]] == [
            "100 - 1,000 views",
            "1,000 - 10,000 views",
        ]
        assert [e["id"] for e in data["rankings"][0]["entries"]] == ["A", "B"]
        assert [e["position"] for e in data["rankings"][0]["entries"]] == [1, 2]

    def test_get_video(self, test_client: TestClient):
        post(test_client, "v", 150, 50, 0, title="No dislikes")

        response = test_client.get("/v1/videos/v")

        assert response.status_code == 200
        assert response.json() == {
            "id": "v",
            "title": "No dislikes",
            "viewCount": 150,
            "likes": 50,
            "dislikes": 0,
            "ratio": 50.0,
        }

    def test_get_unknown_video(self, test_client: TestClient):
        response = test_client.get("/v1/videos/unknown")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"
