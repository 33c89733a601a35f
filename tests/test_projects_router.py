"""Tests for projects router."""

import pytest

from reqanalyst.models import Project
from reqanalyst.services.generation import ArtifactKind, GenerationError, GenerationNotConfiguredError
from tests.conftest import register_user

REQUIREMENTS = "Members borrow books for two weeks. Librarians manage the catalogue."


@pytest.fixture
def signed_in(auth_client):
    test_client, db_session_maker = auth_client
    register_user(test_client, "alice@example.com", "Secret123", "Alice")
    return test_client, db_session_maker


def _create(test_client, name="Library Lending", description=None) -> dict:
    response = test_client.post("/api/projects", json={"name": name, "description": description})
    assert response.status_code == 201, response.text
    return response.json()


def _set_requirements(test_client, project_id, text=REQUIREMENTS) -> dict:
    response = test_client.put(
        f"/api/projects/{project_id}/requirements", json={"requirement_doc": text}
    )
    assert response.status_code == 200, response.text
    return response.json()


class TestProjectCrud:
    def test_create_project(self, signed_in):
        test_client, _ = signed_in

        project = _create(test_client, "Library Lending", "Book loans")

        assert project["name"] == "Library Lending"
        assert project["description"] == "Book loans"
        assert project["requirement_doc"] is None
        assert project["user_stories"] is None

    def test_create_requires_name(self, signed_in):
        test_client, _ = signed_in

        response = test_client.post("/api/projects", json={"name": ""})

        assert response.status_code == 422

    def test_get_project(self, signed_in):
        test_client, _ = signed_in
        project_id = _create(test_client)["id"]

        response = test_client.get(f"/api/projects/{project_id}")

        assert response.status_code == 200
        assert response.json()["id"] == project_id

    def test_get_missing_project(self, signed_in):
        test_client, _ = signed_in

        assert test_client.get("/api/projects/does-not-exist").status_code == 404

    def test_update_requirements(self, signed_in):
        test_client, _ = signed_in
        project_id = _create(test_client)["id"]

        project = _set_requirements(test_client, project_id)

        assert project["requirement_doc"] == REQUIREMENTS

    def test_list_most_recently_updated_first(self, signed_in):
        test_client, _ = signed_in
        first = _create(test_client, "First")["id"]
        second = _create(test_client, "Second")["id"]

        _set_requirements(test_client, first)
        ids = [p["id"] for p in test_client.get("/api/projects").json()]
        assert ids == [first, second]

        _set_requirements(test_client, second)
        ids = [p["id"] for p in test_client.get("/api/projects").json()]
        assert ids == [second, first]

    def test_list_summaries_omit_documents(self, signed_in):
        test_client, _ = signed_in
        _set_requirements(test_client, _create(test_client)["id"])

        summary = test_client.get("/api/projects").json()[0]

        assert "requirement_doc" not in summary

    def test_delete_project(self, signed_in):
        test_client, db_session_maker = signed_in
        project_id = _create(test_client)["id"]

        response = test_client.delete(f"/api/projects/{project_id}")

        assert response.status_code == 204
        assert test_client.get(f"/api/projects/{project_id}").status_code == 404
        db = db_session_maker()
        try:
            assert db.query(Project).count() == 0
        finally:
            db.close()


class TestOwnership:
    def test_projects_are_private(self, signed_in):
        test_client, _ = signed_in
        project_id = _create(test_client)["id"]

        test_client.cookies.clear()
        register_user(test_client, "bob@example.com", "Secret123", "Bob")

        assert test_client.get("/api/projects").json() == []
        assert test_client.get(f"/api/projects/{project_id}").status_code == 404
        assert test_client.delete(f"/api/projects/{project_id}").status_code == 404
        response = test_client.put(
            f"/api/projects/{project_id}/requirements", json={"requirement_doc": "mine now"}
        )
        assert response.status_code == 404

    def test_requires_session(self, auth_client):
        test_client, _ = auth_client

        response = test_client.get("/api/projects", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/login?redirectTo=%2Fapi%2Fprojects"


class TestGenerate:
    @pytest.mark.parametrize(
        "slug, kind, field",
        [
            ("user-stories", ArtifactKind.USER_STORIES, "user_stories"),
            ("entities", ArtifactKind.ENTITIES, "entities"),
            ("db-design", ArtifactKind.DB_DESIGN, "db_design"),
        ],
    )
    def test_generate_and_store(self, signed_in, generation_service, slug, kind, field):
        test_client, _ = signed_in
        project_id = _create(test_client)["id"]
        _set_requirements(test_client, project_id)
        generation_service.generate.return_value = f"generated {slug}"

        response = test_client.post(f"/api/projects/{project_id}/generate/{slug}")

        assert response.status_code == 200
        assert response.json() == {"artifact": slug, "content": f"generated {slug}"}
        generation_service.generate.assert_called_once_with(kind, REQUIREMENTS)
        assert test_client.get(f"/api/projects/{project_id}").json()[field] == f"generated {slug}"

    def test_unknown_artifact(self, signed_in, generation_service):
        test_client, _ = signed_in
        project_id = _create(test_client)["id"]

        response = test_client.post(f"/api/projects/{project_id}/generate/diagrams")

        assert response.status_code == 404
        generation_service.generate.assert_not_called()

    def test_requires_requirements(self, signed_in, generation_service):
        test_client, _ = signed_in
        project_id = _create(test_client)["id"]
        _set_requirements(test_client, project_id, "   ")

        response = test_client.post(f"/api/projects/{project_id}/generate/user-stories")

        assert response.status_code == 400
        generation_service.generate.assert_not_called()

    def test_generation_failure_stores_nothing(self, signed_in, generation_service):
        test_client, _ = signed_in
        project_id = _create(test_client)["id"]
        _set_requirements(test_client, project_id)
        generation_service.generate.side_effect = GenerationError()

        response = test_client.post(f"/api/projects/{project_id}/generate/entities")

        assert response.status_code == 502
        assert response.json()["detail"] == "Generation failed, please try again"
        assert test_client.get(f"/api/projects/{project_id}").json()["entities"] is None

    def test_generation_not_configured(self, signed_in, generation_service):
        test_client, _ = signed_in
        project_id = _create(test_client)["id"]
        _set_requirements(test_client, project_id)
        generation_service.generate.side_effect = GenerationNotConfiguredError()

        response = test_client.post(f"/api/projects/{project_id}/generate/db-design")

        assert response.status_code == 503

    def test_generate_for_other_users_project(self, signed_in, generation_service):
        test_client, _ = signed_in
        project_id = _create(test_client)["id"]
        _set_requirements(test_client, project_id)
        test_client.cookies.clear()
        register_user(test_client, "bob@example.com", "Secret123", "Bob")

        response = test_client.post(f"/api/projects/{project_id}/generate/user-stories")

        assert response.status_code == 404
        generation_service.generate.assert_not_called()
