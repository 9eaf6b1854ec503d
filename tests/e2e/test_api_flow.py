"""End-to-end tests for the HTTP API (in-memory persistence, recording mail)."""

import pytest
from fastapi.testclient import TestClient

from certis.interface.api.app import create_app
from tests.di import build_test_container

PASSWORD = "Str0ng!Password"


@pytest.fixture
def client():
    """Test client over a fresh app and container."""
    app = create_app(build_test_container())
    with TestClient(app) as test_client:
        yield test_client


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def register_and_login(client: TestClient, email: str) -> str:
    response = client.post("/auth/register", json={"email": email, "password": PASSWORD})
    assert response.status_code == 201, response.text
    response = client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def found_organization(client: TestClient, email: str, domain: str) -> str:
    """Register, log in and create an organization; returns the owner's token."""
    token = register_and_login(client, email)
    response = client.post(
        "/organizations",
        json={"name": f"Org {domain}", "domain": domain},
        headers=bearer(token),
    )
    assert response.status_code == 201, response.text
    return response.json()["token"]


def invite_and_accept(
    client: TestClient, owner_token: str, email: str, role: str = "USER"
) -> str:
    """Invite ``email`` and accept as that user; returns the member's token."""
    member_token = register_and_login(client, email)
    response = client.post(
        "/invitations", json={"email": email, "role": role}, headers=bearer(owner_token)
    )
    assert response.status_code == 201, response.text
    response = client.post(
        "/invitations/accept",
        json={"token": response.json()["token"]},
        headers=bearer(member_token),
    )
    assert response.status_code == 200, response.text
    return response.json()["token"]


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestAuthentication:
    def test_register_login_me(self, client):
        token = register_and_login(client, "ada@example.com")

        response = client.get("/auth/me", headers=bearer(token))

        assert response.status_code == 200
        body = response.json()
        assert body["email"] == "ada@example.com"
        assert body["role"] == "USER"
        assert body["organization_id"] is None
        assert "password_hash" not in body

    def test_missing_token_is_401(self, client):
        response = client.get("/auth/me")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token_is_401(self, client):
        response = client.get("/auth/me", headers=bearer("not.a.token"))

        assert response.status_code == 401
        assert response.json()["error"] == "InvalidTokenError"

    def test_wrong_password_is_401(self, client):
        register_and_login(client, "ada@example.com")

        response = client.post(
            "/auth/login", json={"email": "ada@example.com", "password": "Wr0ng!Pass"}
        )

        assert response.status_code == 401

    def test_duplicate_registration_is_409(self, client):
        register_and_login(client, "ada@example.com")

        response = client.post(
            "/auth/register", json={"email": "ADA@example.com", "password": PASSWORD}
        )

        assert response.status_code == 409

    def test_weak_password_is_400(self, client):
        response = client.post(
            "/auth/register", json={"email": "ada@example.com", "password": "weak"}
        )

        assert response.status_code == 400

    def test_malformed_email_is_422(self, client):
        response = client.post(
            "/auth/register", json={"email": "two@@example.com", "password": PASSWORD}
        )

        assert response.status_code == 422

    def test_refresh_reflects_new_membership(self, client):
        old_token = register_and_login(client, "founder@acme.com")
        client.post(
            "/organizations",
            json={"name": "Acme Corp", "domain": "acme.test"},
            headers=bearer(old_token),
        )

        response = client.post("/auth/refresh", json={"token": old_token})

        assert response.status_code == 200
        assert response.json()["user"]["role"] == "OWNER"
        me = client.get("/auth/me", headers=bearer(response.json()["token"]))
        assert me.json()["organization_id"] is not None


class TestOrganizationsAndInvitations:
    def test_invitation_flow(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")

        member_token = invite_and_accept(client, owner_token, "new.hire@example.com")

        response = client.get("/organizations/mine", headers=bearer(member_token))
        assert response.status_code == 200
        assert response.json()["member_count"] == 2
        me = client.get("/auth/me", headers=bearer(member_token)).json()
        assert me["role"] == "USER"

    def test_unaffiliated_user_has_no_organization(self, client):
        token = register_and_login(client, "ada@example.com")

        response = client.get("/organizations/mine", headers=bearer(token))

        assert response.status_code == 412

    def test_duplicate_domain_is_409(self, client):
        found_organization(client, "founder@acme.com", "acme.test")
        token = register_and_login(client, "copycat@example.com")

        response = client.post(
            "/organizations",
            json={"name": "Acme Again", "domain": "acme.test"},
            headers=bearer(token),
        )

        assert response.status_code == 409

    def test_accepting_someone_elses_invitation_is_403(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")
        intruder_token = register_and_login(client, "intruder@example.com")
        invitation = client.post(
            "/invitations",
            json={"email": "new.hire@example.com"},
            headers=bearer(owner_token),
        ).json()

        response = client.post(
            "/invitations/accept",
            json={"token": invitation["token"]},
            headers=bearer(intruder_token),
        )

        assert response.status_code == 403

    def test_revoked_invitation_cannot_be_accepted(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")
        invitee_token = register_and_login(client, "new.hire@example.com")
        invitation = client.post(
            "/invitations",
            json={"email": "new.hire@example.com"},
            headers=bearer(owner_token),
        ).json()

        revoked = client.post(
            f"/invitations/{invitation['token']}/revoke", headers=bearer(owner_token)
        )
        response = client.post(
            "/invitations/accept",
            json={"token": invitation["token"]},
            headers=bearer(invitee_token),
        )

        assert revoked.status_code == 200
        assert revoked.json()["status"] == "revoked"
        assert response.status_code == 404

    def test_empty_token_is_rejected(self, client):
        token = register_and_login(client, "ada@example.com")

        response = client.post(
            "/invitations/accept", json={"token": ""}, headers=bearer(token)
        )

        assert response.status_code == 422

    def test_oversized_token_is_rejected_on_revoke(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")

        response = client.post(
            f"/invitations/{'a' * 300}/revoke", headers=bearer(owner_token)
        )

        assert response.status_code == 422

    def test_unknown_token_is_404(self, client):
        token = register_and_login(client, "ada@example.com")

        response = client.post(
            "/invitations/accept", json={"token": "no-such-token"}, headers=bearer(token)
        )

        assert response.status_code == 404

    def test_malformed_invitee_email_is_422(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")

        response = client.post(
            "/invitations", json={"email": "not an email"}, headers=bearer(owner_token)
        )

        assert response.status_code == 422

    def test_owner_role_cannot_be_invited(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")

        response = client.post(
            "/invitations",
            json={"email": "heir@example.com", "role": "OWNER"},
            headers=bearer(owner_token),
        )

        assert response.status_code == 400

    def test_member_cannot_invite(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")
        member_token = invite_and_accept(client, owner_token, "bob@example.com")

        response = client.post(
            "/invitations", json={"email": "x@example.com"}, headers=bearer(member_token)
        )

        assert response.status_code == 403

    def test_pending_invitations(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")
        client.post(
            "/invitations", json={"email": "x@example.com"}, headers=bearer(owner_token)
        )

        response = client.get("/invitations/pending", headers=bearer(owner_token))

        assert response.status_code == 200
        assert [i["email"] for i in response.json()["invitations"]] == ["x@example.com"]


class TestMembers:
    def test_transfer_ownership(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")
        admin_token = invite_and_accept(client, owner_token, "ada@example.com", "ADMIN")
        admin_id = client.get("/auth/me", headers=bearer(admin_token)).json()["user_id"]

        response = client.post(
            "/members/transfer-ownership",
            json={"new_owner_id": admin_id},
            headers=bearer(owner_token),
        )

        assert response.status_code == 200
        assert response.json()["new_owner"]["role"] == "OWNER"
        me = client.get("/auth/me", headers=bearer(response.json()["token"])).json()
        assert me["role"] == "ADMIN"
        organization = client.get(
            "/organizations/mine", headers=bearer(owner_token)
        ).json()
        assert organization["owner_user_id"] == admin_id

    def test_owner_cannot_be_removed(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")
        admin_token = invite_and_accept(client, owner_token, "ada@example.com", "ADMIN")
        owner_id = client.get("/auth/me", headers=bearer(owner_token)).json()["user_id"]

        response = client.delete(f"/members/{owner_id}", headers=bearer(admin_token))

        assert response.status_code == 412

    def test_change_role_and_remove(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")
        member_token = invite_and_accept(client, owner_token, "bob@example.com")
        member_id = client.get("/auth/me", headers=bearer(member_token)).json()[
            "user_id"
        ]

        promoted = client.put(
            f"/members/{member_id}/role",
            json={"role": "ADMIN"},
            headers=bearer(owner_token),
        )
        removed = client.delete(f"/members/{member_id}", headers=bearer(owner_token))

        assert promoted.json()["role"] == "ADMIN"
        assert removed.status_code == 200
        assert removed.json()["organization_id"] is None


class TestCertificates:
    def test_tenant_isolation(self, client):
        acme_token = found_organization(client, "founder@acme.com", "acme.test")
        globex_token = found_organization(client, "founder@globex.com", "globex.test")

        issued = client.post(
            "/certificates",
            json={
                "recipient_name": "Ada Lovelace",
                "recipient_email": "ada@example.com",
                "title": "Analytical Engines 101",
            },
            headers=bearer(acme_token),
        )
        assert issued.status_code == 201
        certificate_id = issued.json()["certificate_id"]

        # Globex sees nothing and cannot revoke
        listed = client.get("/certificates", headers=bearer(globex_token))
        assert listed.json()["certificates"] == []
        cross = client.post(
            f"/certificates/{certificate_id}/revoke", headers=bearer(globex_token)
        )
        assert cross.status_code == 403

        revoked = client.post(
            f"/certificates/{certificate_id}/revoke", headers=bearer(acme_token)
        )
        assert revoked.status_code == 200
        assert revoked.json()["revoked_at"] is not None

    def test_member_cannot_revoke(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")
        member_token = invite_and_accept(client, owner_token, "bob@example.com")
        issued = client.post(
            "/certificates",
            json={
                "recipient_name": "Ada",
                "recipient_email": "ada@example.com",
                "title": "Title",
            },
            headers=bearer(member_token),
        ).json()

        response = client.post(
            f"/certificates/{issued['certificate_id']}/revoke",
            headers=bearer(member_token),
        )

        assert response.status_code == 403

    def test_all_organizations_requires_platform_role(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")

        response = client.get(
            "/certificates", params={"all_organizations": "true"},
            headers=bearer(owner_token),
        )

        assert response.status_code == 403

    def test_batch_issue_reports_each_item(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")
        course = client.post(
            "/courses",
            json={"title": "Analytical Engines", "slug": "engines-101"},
            headers=bearer(owner_token),
        ).json()

        response = client.post(
            "/certificates/batch",
            json={
                "certificates": [
                    {
                        "recipient_name": "Ada",
                        "recipient_email": "ada@example.com",
                        "title": "Engines",
                        "course_id": course["course_id"],
                    },
                    {
                        "recipient_name": "Bob",
                        "recipient_email": "bob@example.com",
                        "title": "Engines",
                        "course_id": "00000000-0000-0000-0000-000000000000",
                    },
                ]
            },
            headers=bearer(owner_token),
        )

        assert response.status_code == 201
        body = response.json()
        assert body["total_requested"] == 2
        assert body["successfully_created"] == 1
        assert body["failed"] == 1
        assert body["certificates"][0]["course_id"] == course["course_id"]
        assert body["errors"][0]["index"] == 1

    def test_empty_batch_is_422(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")

        response = client.post(
            "/certificates/batch", json={"certificates": []}, headers=bearer(owner_token)
        )

        assert response.status_code == 422


class TestCourses:
    def test_course_lifecycle(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")

        created = client.post(
            "/courses",
            json={"title": "Analytical Engines", "slug": "engines-101"},
            headers=bearer(owner_token),
        )
        assert created.status_code == 201
        course_id = created.json()["course_id"]

        listed = client.get("/courses", headers=bearer(owner_token))
        assert [c["slug"] for c in listed.json()["courses"]] == ["engines-101"]

        deleted = client.delete(f"/courses/{course_id}", headers=bearer(owner_token))
        assert deleted.status_code == 204
        assert client.get("/courses", headers=bearer(owner_token)).json()["courses"] == []

    def test_duplicate_slug_is_409(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")
        payload = {"title": "Analytical Engines", "slug": "engines-101"}
        client.post("/courses", json=payload, headers=bearer(owner_token))

        response = client.post("/courses", json=payload, headers=bearer(owner_token))

        assert response.status_code == 409

    def test_member_cannot_create(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")
        member_token = invite_and_accept(client, owner_token, "bob@example.com")

        response = client.post(
            "/courses",
            json={"title": "Analytical Engines", "slug": "engines-101"},
            headers=bearer(member_token),
        )

        assert response.status_code == 403

    def test_cross_tenant_delete_is_403(self, client):
        acme_token = found_organization(client, "founder@acme.com", "acme.test")
        globex_token = found_organization(client, "founder@globex.com", "globex.test")
        course_id = client.post(
            "/courses",
            json={"title": "Analytical Engines", "slug": "engines-101"},
            headers=bearer(acme_token),
        ).json()["course_id"]

        response = client.delete(f"/courses/{course_id}", headers=bearer(globex_token))

        assert response.status_code == 403
        assert len(client.get("/courses", headers=bearer(acme_token)).json()["courses"]) == 1

    def test_course_with_certificates_cannot_be_deleted(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")
        course_id = client.post(
            "/courses",
            json={"title": "Analytical Engines", "slug": "engines-101"},
            headers=bearer(owner_token),
        ).json()["course_id"]
        client.post(
            "/certificates",
            json={
                "recipient_name": "Ada",
                "recipient_email": "ada@example.com",
                "title": "Engines",
                "course_id": course_id,
            },
            headers=bearer(owner_token),
        )

        response = client.delete(f"/courses/{course_id}", headers=bearer(owner_token))

        assert response.status_code == 409

    def test_invalid_slug_is_422(self, client):
        owner_token = found_organization(client, "founder@acme.com", "acme.test")

        response = client.post(
            "/courses",
            json={"title": "Analytical Engines", "slug": "Not A Slug"},
            headers=bearer(owner_token),
        )

        assert response.status_code == 422
