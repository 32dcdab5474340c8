"""End-to-end tests for the HTTP API with offline collaborators."""

from io import BytesIO

from PIL import Image

from fynix.domain.feed.seed_cards import seed_feed_items

API = "/api/v1"

MATERIAL = (
    "Photosynthesis turns light energy into chemical energy. "
    "It takes place in the chloroplasts of plant cells. "
    "Oxygen is released as a by-product of the process."
)


def png() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (40, 30), (120, 120, 120)).save(buffer, format="PNG")
    return buffer.getvalue()


def login(client, email="mia@example.com", name="Mia"):
    response = client.post(f"{API}/profile/login", json={"email": email, "name": name})
    assert response.status_code == 200
    return response.json()


def onboard(client):
    login(client)
    response = client.patch(
        f"{API}/profile", json={"onboarded": True, "grade": "9", "interests": "Space"}
    )
    assert response.status_code == 200
    return response.json()


def create_list(client, name="Fruit"):
    response = client.post(
        f"{API}/vocab-lists", json={"name": name, "source_lang": "de", "target_lang": "en"}
    )
    assert response.status_code == 201
    return response.json()["id"]


class TestRootEndpoints:
    def test_root(self, client):
        assert client.get("/").json() == {"message": "Welcome to Fynix API"}

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_api_root(self, client):
        data = client.get(f"{API}/").json()
        assert data["message"] == "Fynix API v1"
        assert data["docs"] == f"{API}/docs"


class TestProfile:
    def test_no_session_on_startup(self, client):
        data = client.get(f"{API}/profile").json()
        assert data["user"] is None
        assert data["level"] is None
        assert data["screen"] == "splash"

    def test_login_starts_onboarding(self, client):
        user = login(client)
        assert user["email"] == "mia@example.com"
        assert user["onboarded"] is False
        assert client.get(f"{API}/profile").json()["screen"] == "onboarding"

    def test_guest_login(self, client):
        user = client.post(f"{API}/profile/guest").json()
        assert user["is_guest"] is True
        assert user["name"] == "Guest"

    def test_update_without_profile_is_not_found(self, client):
        response = client.patch(f"{API}/profile", json={"grade": "9"})
        assert response.status_code == 404
        assert response.json()["detail"] == "No active profile"

    def test_roast_level_is_bounded(self, client):
        login(client)
        assert client.patch(f"{API}/profile", json={"roast_level": 9}).status_code == 422

    def test_returning_user_keeps_profile(self, client):
        onboard(client)
        client.post(f"{API}/profile/xp", json={"amount": 40})
        client.post(f"{API}/profile/logout")

        user = login(client, name="Someone else")
        assert user["name"] == "Mia"
        assert user["xp"] == 40
        assert client.get(f"{API}/profile").json()["screen"] == "home"

    def test_xp_and_level(self, client):
        onboard(client)
        data = client.post(f"{API}/profile/xp", json={"amount": 175}).json()
        assert data == {"credited": 175, "xp": 175}

        level = client.get(f"{API}/profile").json()["level"]
        assert level["current_threshold"] == 100
        assert level["next_threshold"] == 250
        assert level["percent_to_next"] == 50

    def test_negative_xp_is_rejected(self, client):
        onboard(client)
        assert client.post(f"{API}/profile/xp", json={"amount": -1}).status_code == 422

    def test_roast_requires_profile(self, client):
        assert client.get(f"{API}/profile/roast").status_code == 404
        login(client)
        assert client.get(f"{API}/profile/roast").json()["line"]

    def test_screen_navigation(self, client):
        data = client.put(f"{API}/profile/screen", json={"screen": "money"}).json()
        assert data["screen"] == "money"

    def test_resume_without_profile(self, client):
        assert client.post(f"{API}/profile/resume").json() == {"streak": None}

    def test_chest_without_chests(self, client):
        login(client)
        data = client.post(f"{API}/profile/chests/open").json()
        assert data["reward"] is None
        assert data["chests"] == 0

    def test_use_joker(self, client):
        login(client)
        assert client.post(f"{API}/profile/jokers/use").json() == {"success": True, "jokers": 2}

    def test_buy_joker_without_xp(self, client):
        login(client)
        assert client.post(f"{API}/profile/jokers/buy").json()["success"] is False


class TestHabits:
    def test_complete_positive_habit(self, client):
        onboard(client)
        habit = client.post(
            f"{API}/habits", json={"name": "Read", "polarity": "positive", "xp_value": 10, "reps": 2}
        ).json()

        data = client.post(f"{API}/habits/{habit['id']}/complete").json()
        assert data["success"] is True
        assert data["xp_delta"] == 20
        assert data["habit"]["completed_today"] is True
        assert client.get(f"{API}/profile").json()["user"]["xp"] == 20

    def test_second_completion_is_a_no_op(self, client):
        onboard(client)
        habit_id = client.post(f"{API}/habits", json={"name": "Run", "xp_value": 5}).json()["id"]
        client.post(f"{API}/habits/{habit_id}/complete")

        data = client.post(f"{API}/habits/{habit_id}/complete").json()
        assert data == {
            "success": False,
            "message": "Habit already completed today",
            "xp_delta": 0,
            "habit": None,
        }

    def test_negative_habit_costs_xp(self, client):
        onboard(client)
        client.post(f"{API}/profile/xp", json={"amount": 30})
        habit_id = client.post(
            f"{API}/habits", json={"name": "Doomscrolling", "polarity": "negative", "xp_value": -10}
        ).json()["id"]

        assert client.post(f"{API}/habits/{habit_id}/complete").json()["xp_delta"] == -10
        assert client.get(f"{API}/profile").json()["user"]["xp"] == 20

    def test_unknown_habit(self, client):
        assert client.post(f"{API}/habits/nope/complete").status_code == 404
        assert client.delete(f"{API}/habits/nope").status_code == 404

    def test_delete_habit(self, client):
        habit_id = client.post(f"{API}/habits", json={"name": "Read", "xp_value": 5}).json()["id"]
        assert client.delete(f"{API}/habits/{habit_id}").json()["success"] is True
        assert client.get(f"{API}/habits").json() == []


class TestMoney:
    def test_income_awards_xp_and_milestone(self, client):
        onboard(client)
        response = client.post(
            f"{API}/money", json={"amount": 150, "direction": "income", "note": "Taschengeld"}
        )
        assert response.status_code == 201
        data = response.json()
        assert data["xp_awarded"] == 15 + 50
        assert data["milestone_reached"] is True

    def test_overview_lists_newest_first(self, client):
        login(client)
        for amount, direction, category in ((20, "income", "Nebenjob"), (5, "expense", "Essen")):
            client.post(
                f"{API}/money",
                json={"amount": amount, "direction": direction, "category": category},
            )

        data = client.get(f"{API}/money").json()
        assert [entry["amount"] for entry in data["entries"]] == [5, 20]
        assert data["month"] == {"income": 20, "expense": 5, "balance": 15}

    def test_non_positive_amount_is_rejected(self, client):
        response = client.post(
            f"{API}/money", json={"amount": 0, "direction": "expense", "category": "Essen"}
        )
        assert response.status_code == 400

    def test_category_suggestion_lists_categories(self, client):
        data = client.get(
            f"{API}/money/categories", params={"direction": "expense", "note": ""}
        ).json()
        assert data["category"] in data["categories"]

    def test_delete_unknown_entry(self, client):
        assert client.delete(f"{API}/money/nope").status_code == 404


class TestVocabulary:
    def test_parse_preview(self, client):
        data = client.post(f"{API}/vocab-lists/parse", json={"text": "Hund - dog\nKatze: cat"}).json()
        assert data["pairs"] == [
            {"term": "Hund", "translation": "dog"},
            {"term": "Katze", "translation": "cat"},
        ]

    def test_import_and_read_back(self, client):
        list_id = create_list(client)
        response = client.post(
            f"{API}/vocab-lists/{list_id}/import", json={"text": "Apfel - apple\nBirne = pear"}
        )
        assert response.json() == {"added": 2}

        entries = client.get(f"{API}/vocab-lists/{list_id}").json()["entries"]
        assert [(entry["term"], entry["translation"]) for entry in entries] == [
            ("Apfel", "apple"),
            ("Birne", "pear"),
        ]

    def test_entry_crud(self, client):
        list_id = create_list(client)
        entry = client.post(
            f"{API}/vocab-lists/{list_id}/entries", json={"term": "Hund", "translation": "dgo"}
        ).json()

        updated = client.patch(
            f"{API}/vocab-lists/{list_id}/entries/{entry['id']}", json={"translation": "dog"}
        ).json()
        assert updated["translation"] == "dog"
        assert updated["term"] == "Hund"

        assert client.delete(f"{API}/vocab-lists/{list_id}/entries/{entry['id']}").status_code == 200
        assert client.delete(f"{API}/vocab-lists/{list_id}/entries/{entry['id']}").status_code == 404

    def test_unknown_list(self, client):
        assert client.get(f"{API}/vocab-lists/nope").status_code == 404
        response = client.post(f"{API}/vocab-lists/nope/import", json={"text": "a - b"})
        assert response.status_code == 404

    def test_quiz_falls_back_to_local(self, client):
        list_id = create_list(client)
        client.post(
            f"{API}/vocab-lists/{list_id}/import",
            json={"text": "Apfel - apple\nBirne - pear\nKirsche - cherry"},
        )

        response = client.post(f"{API}/vocab-lists/{list_id}/quiz", json={})
        assert response.status_code == 200
        data = response.json()
        assert data["source"] == "local"
        assert len(data["items"]) == 3
        for item in data["items"]:
            assert item["answer"] in item["options"]

    def test_quiz_needs_two_words(self, client):
        list_id = create_list(client)
        client.post(f"{API}/vocab-lists/{list_id}/entries", json={"term": "Hund", "translation": "dog"})
        assert client.post(f"{API}/vocab-lists/{list_id}/quiz", json={}).status_code == 400

    def test_scan_with_nothing_recognized(self, client):
        list_id = create_list(client)
        response = client.post(
            f"{API}/vocab-lists/{list_id}/scan",
            files={"image": ("page.png", png(), "image/png")},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["added"] == 0
        assert data["source"] is None
        assert data["comment"] == "Nice picture."
        assert data["message"]

    def test_scan_rejects_empty_upload(self, client):
        list_id = create_list(client)
        response = client.post(
            f"{API}/vocab-lists/{list_id}/scan", files={"image": ("page.png", b"", "image/png")}
        )
        assert response.status_code == 400


class TestQuizzes:
    def test_material_quiz_from_text(self, client):
        data = client.post(f"{API}/quizzes/material", json={"text": MATERIAL}).json()
        assert data["source"] == "local"
        assert len(data["items"]) == 3

    def test_short_material_is_rejected(self, client):
        assert client.post(f"{API}/quizzes/material", json={"text": "Too short"}).status_code == 400

    def test_material_image_without_text(self, client):
        response = client.post(
            f"{API}/quizzes/material/image", files={"image": ("page.png", png(), "image/png")}
        )
        assert response.status_code == 400

    def test_correct_vocabulary_answer(self, client):
        onboard(client)
        data = client.post(
            f"{API}/quizzes/answer",
            json={"kind": "vocabulary", "given": " Apple ", "expected": "apple"},
        ).json()
        assert data["correct"] is True
        assert data["xp_delta"] == 15

    def test_wrong_material_answer_costs_nothing(self, client):
        onboard(client)
        data = client.post(
            f"{API}/quizzes/answer", json={"kind": "material", "given": "pear", "expected": "apple"}
        ).json()
        assert data == {"correct": False, "xp_delta": 0, "expected": "apple", "comment": None}

    def test_feedback_without_ai(self, client):
        response = client.post(
            f"{API}/quizzes/feedback",
            json={
                "question": "2 + 2?",
                "user_answer": "5",
                "correct_answer": "4",
                "is_correct": False,
            },
        )
        assert response.status_code == 200
        assert response.json()["comment"]

    def test_vocab_feedback(self, client):
        response = client.post(
            f"{API}/quizzes/feedback/vocab", json={"term": "Hund", "is_correct": True}
        )
        assert response.json()["comment"]


class TestFeed:
    def test_seeded_on_startup(self, client):
        data = client.get(f"{API}/feed").json()
        assert len(data["items"]) == len(seed_feed_items())
        assert data["refreshing"] is False

    def test_refresh_without_ai_adds_nothing(self, client):
        onboard(client)
        assert client.post(f"{API}/feed/refresh").json() == {"added": False}

    def test_answer_feed_card(self, client):
        onboard(client)
        card = client.get(f"{API}/feed").json()["items"][0]
        quiz = card["quiz"]

        right = client.post(f"{API}/feed/0/answer", json={"selected": quiz["correct"]}).json()
        assert right["correct"] is True
        assert right["xp_delta"] == 25
        assert right["expected"] == quiz["options"][quiz["correct"]]

        wrong_option = (quiz["correct"] + 1) % len(quiz["options"])
        wrong = client.post(f"{API}/feed/0/answer", json={"selected": wrong_option}).json()
        assert wrong["correct"] is False
        assert wrong["xp_delta"] == -5

    def test_answer_unknown_card(self, client):
        response = client.post(f"{API}/feed/999/answer", json={"selected": 0})
        assert response.status_code == 404

    def test_answer_unknown_option(self, client):
        assert client.post(f"{API}/feed/0/answer", json={"selected": 99}).status_code == 400

    def test_saved_facts(self, client):
        fact = {"category": "Space", "title": "Venus", "content": "A day is longer than a year."}
        created = client.post(f"{API}/feed/saved", json=fact)
        assert created.status_code == 201

        duplicate = client.post(f"{API}/feed/saved", json=fact)
        assert duplicate.status_code == 409
        assert duplicate.json()["detail"] == "Already saved!"

        saved = client.get(f"{API}/feed/saved").json()
        assert [item["title"] for item in saved] == ["Venus"]

        fact_id = created.json()["id"]
        assert client.delete(f"{API}/feed/saved/{fact_id}").status_code == 200
        assert client.delete(f"{API}/feed/saved/{fact_id}").status_code == 404


class TestPreferences:
    def test_defaults(self, client):
        data = client.get(f"{API}/preferences").json()
        assert data["theme"] == "dark"
        assert data["music_enabled"] is True

    def test_partial_update(self, client):
        data = client.patch(f"{API}/preferences", json={"language": "es", "accent": "red"}).json()
        assert data["language"] == "es"
        assert data["accent"] == "red"
        assert data["theme"] == "dark"

    def test_unknown_language(self, client):
        assert client.patch(f"{API}/preferences", json={"language": "fr"}).status_code == 422
