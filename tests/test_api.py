"""
HTTP-level tests for the contract management API
"""


def as_user(user_id):
    return {"X-User-Id": user_id}


class TestAuth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_missing_user_header(self, client):
        response = client.get("/api/contracts")
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "not_authenticated"

    def test_unknown_user_header(self, client):
        response = client.get("/api/contracts", headers=as_user("u99"))
        assert response.status_code == 401

    def test_login_by_email(self, client):
        response = client.post("/api/auth/login", json={"email": "ADMIN@university.edu"})
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "u1"
        assert "contract.approve_hr" in body["permissions"]

    def test_login_unknown_email(self, client):
        response = client.post("/api/auth/login", json={"email": "nobody@university.edu"})
        assert response.status_code == 401

    def test_me(self, client):
        response = client.get("/api/auth/me", headers=as_user("u4"))
        assert response.status_code == 200
        assert response.json()["department_name"] == "Computer Science"


class TestContracts:

    def test_list_is_scoped(self, client):
        response = client.get("/api/contracts", headers=as_user("u4"))
        assert response.status_code == 200
        assert [c["id"] for c in response.json()["items"]] == ["c1", "c4"]

    def test_list_with_status_filter(self, client):
        response = client.get("/api/contracts", params={"status": "pending_hr"}, headers=as_user("u1"))
        assert response.json()["total"] == 1

    def test_contract_outside_scope_is_404(self, client):
        response = client.get("/api/contracts/c1", headers=as_user("u6"))
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "contract_not_found"

    def test_get_contract_detail(self, client):
        response = client.get("/api/contracts/c4", headers=as_user("u4"))
        body = response.json()
        assert body["teacher_name"] == "Liu Jiaoshou"
        assert body["template_name"] == "Part-time Teacher Contract"
        assert body["available_actions"] == ["submit"]

    def test_teacher_creates_own_contract(self, client):
        response = client.post("/api/contracts", headers=as_user("u6"), json={
            "type": "full_time",
            "start_date": "2023-09-01",
            "end_date": "2026-08-31",
        })
        assert response.status_code == 201
        body = response.json()
        assert body["id"] == "c5"
        assert body["teacher_id"] == "u6"
        assert body["status"] == "draft"

    def test_teacher_cannot_create_for_others(self, client):
        response = client.post("/api/contracts", headers=as_user("u4"), json={
            "teacher_id": "u6", "type": "full_time", "start_date": "2023-09-01", "end_date": "2026-08-31",
        })
        assert response.status_code == 403

    def test_dept_admin_creates_within_department(self, client):
        payload = {"type": "temporary", "start_date": "2024-02-01", "end_date": "2024-06-30"}
        assert client.post(
            "/api/contracts", headers=as_user("u2"), json={**payload, "teacher_id": "u5"}
        ).status_code == 201
        assert client.post(
            "/api/contracts", headers=as_user("u2"), json={**payload, "teacher_id": "u6"}
        ).status_code == 403

    def test_end_before_start_is_rejected(self, client):
        response = client.post("/api/contracts", headers=as_user("u4"), json={
            "type": "full_time", "start_date": "2026-09-01", "end_date": "2026-08-31",
        })
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "validation_error"

    def test_illegal_status_change_is_409(self, client):
        response = client.put("/api/contracts/c4/status", headers=as_user("u1"), json={"status": "approved"})
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "illegal_transition"

    def test_wrong_role_is_403(self, client):
        # c2 waits on HR, not on the department admin
        response = client.post("/api/contracts/c2/actions/approve", headers=as_user("u2"))
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "transition_not_permitted"

    def test_submit_needs_submit_permission(self, client):
        response = client.post("/api/contracts/c4/actions/submit", headers=as_user("u2"))
        assert response.status_code == 403
        body = response.json()["error"]
        assert body["code"] == "permission_denied"
        assert body["details"]["required"] == ["contract.submit"]

    def test_archive_needs_administer_permission(self, client):
        response = client.post("/api/contracts/c1/actions/archive", headers=as_user("u4"))
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "permission_denied"

        response = client.put("/api/contracts/c1/status", headers=as_user("u4"), json={"status": "terminated"})
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "permission_denied"

        response = client.post("/api/contracts/c1/actions/archive", headers=as_user("u1"))
        assert response.json()["status"] == "archived"

    def test_admin_cannot_act_outside_department(self, client):
        response = client.post("/api/contracts/c3/actions/approve", headers=as_user("u2"))
        assert response.status_code == 404

    def test_approval_flow(self, client):
        response = client.post("/api/contracts/c4/actions/submit", headers=as_user("u4"))
        assert response.status_code == 200
        assert response.json()["status"] == "pending_dept"

        inbox = client.get("/api/notifications", params={"unread_only": True}, headers=as_user("u2")).json()
        assert inbox["items"][0]["link"] == "/approvals/c4"

        response = client.put(
            "/api/contracts/c4/status", headers=as_user("u2"), json={"status": "pending_hr"}
        )
        assert response.json()["department_approved_by"] == "u2"

        response = client.post(
            "/api/contracts/c4/actions/reject", headers=as_user("u1"), json={"reason": "Missing paperwork"}
        )
        body = response.json()
        assert body["status"] == "rejected"
        assert body["rejection_reason"] == "Missing paperwork"
        assert body["available_actions"] == []

    def test_attachments(self, client):
        response = client.post("/api/contracts/c4/attachments", headers=as_user("u4"), json={
            "name": "Signed offer", "file_url": "/attachments/offer.pdf", "file_size": 1024,
        })
        assert response.status_code == 201
        assert response.json()["id"] == "a1"

        listing = client.get("/api/contracts/c4/attachments", headers=as_user("u4")).json()
        assert [a["name"] for a in listing] == ["Signed offer"]


class TestApprovals:

    def test_pending_for_department_admin(self, client):
        response = client.get("/api/approvals/pending", headers=as_user("u3"))
        body = response.json()
        assert body["stage"] == "pending_dept"
        assert [item["id"] for item in body["items"]] == ["c3"]
        assert body["items"][0]["department"] == "Mathematics"

    def test_pending_for_hr(self, client):
        body = client.get("/api/approvals/pending", headers=as_user("u1")).json()
        assert [item["id"] for item in body["items"]] == ["c2"]

    def test_teacher_has_no_approvals(self, client):
        response = client.get("/api/approvals/pending", headers=as_user("u4"))
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "permission_denied"


class TestTemplatesAndUsers:

    def test_templates_filtered_by_type(self, client):
        response = client.get("/api/templates", params={"contract_type": "visiting"}, headers=as_user("u4"))
        assert [t["id"] for t in response.json()] == ["t3"]

    def test_only_hr_manages_templates(self, client):
        payload = {"name": "Summer School Contract", "applicable_contract_types": ["temporary"]}
        assert client.post("/api/templates", headers=as_user("u2"), json=payload).status_code == 403

        response = client.post("/api/templates", headers=as_user("u1"), json=payload)
        assert response.status_code == 201
        assert response.json()["id"] == "t4"

        assert client.delete("/api/templates/t4", headers=as_user("u1")).status_code == 204
        assert client.get("/api/templates/t4", headers=as_user("u1")).status_code == 404

    def test_users_scoped_for_department_admin(self, client):
        response = client.get("/api/users", headers=as_user("u2"))
        assert [u["id"] for u in response.json()] == ["u2", "u4", "u5"]
        assert client.get("/api/users/u6", headers=as_user("u2")).status_code == 404
        assert client.get("/api/users", headers=as_user("u4")).status_code == 403

    def test_create_user_duplicate_email(self, client):
        response = client.post("/api/users", headers=as_user("u1"), json={
            "name": "Another Liu", "email": "liu@university.edu", "role": "teacher",
        })
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "duplicate_email"

    def test_departments(self, client):
        response = client.get("/api/departments", headers=as_user("u6"))
        assert [d["code"] for d in response.json()] == ["CS", "MATH", "PHYS"]


class TestNotificationsAndReports:

    def test_read_notifications(self, client):
        response = client.post("/api/notifications/n1/read", headers=as_user("u1"))
        assert response.status_code == 200
        assert response.json()["is_read"] is True

        assert client.post("/api/notifications/n2/read", headers=as_user("u1")).status_code == 404

        response = client.post("/api/notifications/read-all", headers=as_user("u1"))
        assert response.json()["updated"] == 1

    def test_dashboard(self, client):
        body = client.get("/api/reports/dashboard", headers=as_user("u4")).json()
        assert body["role"] == "teacher"
        assert body["stats"]["draft_contracts"] == 1

    def test_expiring_report_shape(self, client):
        response = client.get("/api/reports/expiring", params={"within_days": 60}, headers=as_user("u1"))
        assert response.status_code == 200
        body = response.json()
        assert body["within_days"] == 60
        assert body["total"] == len(body["items"])

    def test_reminders_need_hr(self, client):
        assert client.post("/api/reports/expiring/remind", headers=as_user("u2")).status_code == 403
        assert client.post("/api/reports/expiring/remind", headers=as_user("u1")).status_code == 200
