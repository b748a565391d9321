"""Integration tests for the dashboard's HTTP surface."""

import pytest
from httpx import AsyncClient

from tests.factories import make_user
from tests.fake_api import ADMIN_PASSWORD, ADMIN_PHONE, ADMIN_TOKEN, VALID_OTP, FakeMarketplace


# ---------------------------------------------------------------------------
# 1. Health, request IDs and entry redirects
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    resp = await client.get("/health", headers={"X-Request-ID": "req-1"})

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert resp.headers["X-Request-ID"] == "req-1"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/", "/dashboard", "/features", "/users/3", "/profile", "/settings"])
async def test_pages_without_token_redirect_to_login(client: AsyncClient, path: str) -> None:
    resp = await client.get(path)

    assert resp.status_code == 303
    assert resp.headers["location"] == "/login"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/", "/login"])
async def test_signed_in_entry_pages_redirect_home(admin: AsyncClient, path: str) -> None:
    resp = await admin.get(path)

    assert resp.status_code == 303
    assert resp.headers["location"] == "/dashboard"


@pytest.mark.asyncio
async def test_request_id_is_forwarded_upstream(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    await admin.get("/features", headers={"X-Request-ID": "trace-77"})

    assert seeded_api.sent("GET", "/admin/features")[0].headers["x-request-id"] == "trace-77"


# ---------------------------------------------------------------------------
# 2. Login, logout and the password-reset pages
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_login_sets_session_cookie(client: AsyncClient, backend: FakeMarketplace) -> None:
    resp = await client.post("/login", json={"phone": ADMIN_PHONE, "password": ADMIN_PASSWORD})

    assert resp.status_code == 200
    assert resp.json()["redirect_to"] == "/dashboard"
    assert resp.cookies["token"] == ADMIN_TOKEN
    cookie = resp.headers["set-cookie"]
    assert "Max-Age=604800" in cookie
    assert "SameSite=lax" in cookie


@pytest.mark.asyncio
async def test_login_validates_before_calling_api(client: AsyncClient, backend: FakeMarketplace) -> None:
    resp = await client.post("/login", json={"phone": "123", "password": "x"})

    assert resp.status_code == 422
    assert set(resp.json()["error"]["fields"]) == {"phone", "password"}
    assert backend.requests == []


@pytest.mark.asyncio
async def test_login_with_wrong_password(client: AsyncClient, backend: FakeMarketplace) -> None:
    resp = await client.post("/login", json={"phone": ADMIN_PHONE, "password": "wrong-password"})

    assert resp.status_code == 400
    assert resp.json() == {"error": {"code": "domain_error", "message": "Invalid credentials"}}
    assert "token" not in resp.cookies


@pytest.mark.asyncio
async def test_login_post_with_stale_cookie_is_not_redirected(
    client: AsyncClient, backend: FakeMarketplace
) -> None:
    client.cookies.set("token", "stale")

    resp = await client.post("/login", json={"phone": ADMIN_PHONE, "password": ADMIN_PASSWORD})

    assert resp.status_code == 200
    assert resp.cookies["token"] == ADMIN_TOKEN


@pytest.mark.asyncio
async def test_logout_clears_cookie(admin: AsyncClient, backend: FakeMarketplace) -> None:
    resp = await admin.post("/logout")

    assert resp.status_code == 303
    assert resp.headers["location"] == "/login"
    assert "Max-Age=0" in resp.headers["set-cookie"]
    assert ADMIN_TOKEN not in backend.tokens


@pytest.mark.asyncio
async def test_password_reset_pages(client: AsyncClient, backend: FakeMarketplace) -> None:
    resp = await client.post("/forgot-password", json={"phone": ADMIN_PHONE})
    assert resp.json()["redirect_to"] == f"/verify-otp?phone={ADMIN_PHONE}"

    resp = await client.post("/verify-otp", json={"phone": ADMIN_PHONE, "otp": "999999"})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Invalid verification code"

    resp = await client.post("/verify-otp", json={"phone": ADMIN_PHONE, "otp": VALID_OTP})
    assert resp.json()["redirect_to"] == f"/reset-password?phone={ADMIN_PHONE}"

    resp = await client.post(
        "/reset-password",
        json={"phone": ADMIN_PHONE, "password": "n3w-pass", "password_confirmation": "n3w-pass"},
    )
    assert resp.status_code == 200
    assert resp.json()["redirect_to"] == "/login"


# ---------------------------------------------------------------------------
# 3. Session expiry
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_rejected_token_redirects_to_login_and_drops_cookie(
    client: AsyncClient, seeded_api: FakeMarketplace
) -> None:
    client.cookies.set("token", "revoked-token")

    resp = await client.get("/features")

    assert resp.status_code == 303
    assert resp.headers["location"] == "/login"
    assert "Max-Age=0" in resp.headers["set-cookie"]


# ---------------------------------------------------------------------------
# 4. Screens
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_dashboard_totals(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.get("/dashboard")

    assert resp.status_code == 200
    assert resp.json()["totals"] == {
        "users": 5,
        "listings": 2,
        "bookings": 1,
        "reviews": 2,
        "transactions": 3,
    }


@pytest.mark.asyncio
async def test_feature_list_shows_visibility_badges(
    admin: AsyncClient, seeded_api: FakeMarketplace
) -> None:
    resp = await admin.get("/features")

    body = resp.json()
    assert resp.status_code == 200
    assert body["state"] == "loaded"
    assert body["total"] == 2
    assert [item["visibility_label"] for item in body["items"]] == ["مرئي", "مخفي"]


@pytest.mark.asyncio
async def test_user_search_passes_filters_through(
    admin: AsyncClient, seeded_api: FakeMarketplace
) -> None:
    resp = await admin.get("/users", params={"search": "ahmed", "role": "user"})

    assert [item["full_name"] for item in resp.json()["items"]] == ["Ahmed Hassan"]
    assert seeded_api.sent("GET", "/admin/users")[0].params == {
        "page": "1",
        "limit": "10",
        "search": "ahmed",
        "role": "user",
    }


@pytest.mark.asyncio
async def test_page_size_is_capped(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.get("/bookings", params={"limit": 500, "page": 1})

    assert resp.json()["per_page"] == 100
    assert seeded_api.sent("GET", "/admin/bookings")[0].params["limit"] == "100"


@pytest.mark.asyncio
async def test_failed_list_reports_error_state(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    seeded_api.fail("GET", "/admin/bookings", status_code=500, message="Database unavailable")

    resp = await admin.get("/bookings")

    body = resp.json()
    assert resp.status_code == 200
    assert body["state"] == "error"
    assert body["error"] == "Database unavailable"
    assert body["toasts"][0]["variant"] == "destructive"


@pytest.mark.asyncio
async def test_staff_screen_lists_employees_only(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.get("/staff")

    assert {item["role"] for item in resp.json()["items"]} == {"employee"}


@pytest.mark.asyncio
async def test_get_missing_entity_is_404(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.get("/listings/99")

    assert resp.status_code == 404
    assert resp.json()["error"] == {"code": "not_found", "message": "Listing with id 99 not found"}


@pytest.mark.asyncio
async def test_create_feature(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.post(
        "/features",
        json={"name": {"ar": "واي فاي"}, "description": {"ar": "إنترنت"}, "is_visible": True},
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["data"]["name"]["ar"] == "واي فاي"
    assert body["data"]["visibility_label"] == "مرئي"
    assert body["toasts"][0]["title"] == "Saved"
    assert len(seeded_api.tables["features"]) == 3


@pytest.mark.asyncio
async def test_create_with_invalid_values_is_422(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.post("/features", json={"name": {"ar": ""}, "description": {"ar": "x"}})

    assert resp.status_code == 422
    assert "name.ar" in resp.json()["error"]["fields"]
    assert seeded_api.sent("POST") == []


@pytest.mark.asyncio
async def test_create_rejected_by_api_is_400(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    seeded_api.fail("POST", "/admin/categories", status_code=200, message="الاسم مستخدم")

    resp = await admin.post("/categories", json={"name": {"ar": "شاطئ"}, "description": {"ar": "بحر"}})

    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "الاسم مستخدم"


@pytest.mark.asyncio
async def test_update_merges_with_current_entity(
    admin: AsyncClient, seeded_api: FakeMarketplace
) -> None:
    resp = await admin.put("/features/1", json={"is_visible": False})

    assert resp.status_code == 200
    assert resp.json()["data"]["visibility_label"] == "مخفي"
    assert seeded_api.sent("PUT", "/admin/features/1")[0].json()["name"] == {"ar": "مسبح", "en": "Pool"}


@pytest.mark.asyncio
async def test_reviews_have_no_create_or_edit(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    assert (await admin.post("/reviews", json={})).status_code == 405
    assert (await admin.put("/reviews/1", json={})).status_code == 405


@pytest.mark.asyncio
async def test_delete_category(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.delete("/categories/2")

    assert resp.status_code == 200
    assert resp.json()["deleted"] is True
    assert 2 not in seeded_api.tables["categories"]


@pytest.mark.asyncio
async def test_failed_delete_is_400(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    seeded_api.fail("DELETE", "/admin/categories/1", status_code=409, message="Category in use")

    resp = await admin.delete("/categories/1")

    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Category in use"


# ---------------------------------------------------------------------------
# 5. Row actions
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_toggle_review_block(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.post("/reviews/1/toggle-block")
    assert resp.json()["data"]["status_label"] == "محظور"

    resp = await admin.post("/reviews/1/toggle-block")
    assert resp.json()["data"]["status_label"] == "نشط"


@pytest.mark.asyncio
async def test_change_user_status(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.post("/users/3/status", json={"status": "banned"})

    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "banned"


@pytest.mark.asyncio
async def test_transaction_status_is_validated(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.post("/transactions/1/status", json={"status": "lost"})

    assert resp.status_code == 422
    assert list(resp.json()["error"]["fields"]) == ["status"]
    assert seeded_api.sent("PUT") == []


@pytest.mark.asyncio
async def test_export_transactions(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.get("/transactions/export", params={"status": "completed"})

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/vnd.openxmlformats")
    assert "attachment" in resp.headers["content-disposition"]
    assert resp.content.splitlines()[1].startswith(b"2,completed")


@pytest.mark.asyncio
async def test_notifications_actions(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    assert (await admin.get("/notifications/unread-count")).json() == {"count": 2}

    resp = await admin.post("/notifications/1/read")
    assert resp.json()["data"]["is_read"] is True
    assert (await admin.get("/notifications/unread-count")).json() == {"count": 1}

    await admin.post("/notifications/read-all")
    assert (await admin.get("/notifications/unread-count")).json() == {"count": 0}


@pytest.mark.asyncio
async def test_reorder_listing_images(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.post("/listings/1/images/reorder", json={"image_ids": [12, 13, 11]})

    orders = {image["id"]: image["orders"] for image in resp.json()["data"]["images"]}
    assert orders == {12: 0, 13: 1, 11: 2}


@pytest.mark.asyncio
async def test_upload_image(admin: AsyncClient, backend: FakeMarketplace) -> None:
    resp = await admin.post(
        "/uploads/images",
        files={"image": ("wifi.png", b"\x89PNG", "image/png")},
        data={"folder": "features"},
    )

    assert resp.status_code == 201
    assert resp.json()["data"] == {
        "image_name": "1-wifi.png",
        "image_url": "https://cdn.test/features/1-wifi.png",
    }


# ---------------------------------------------------------------------------
# 6. Edits of users and staff
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
@pytest.mark.parametrize("stored, sent", [("pending", "pending"), ("banneded", "banned")])
async def test_staff_edit_keeps_stored_status(
    admin: AsyncClient, seeded_api: FakeMarketplace, stored: str, sent: str
) -> None:
    row = seeded_api.add(
        "users",
        make_user(first_name="Rami", email="rami@sawa.test", role="employee", status=stored),
    )

    resp = await admin.put(f"/staff/{row['id']}", json={"department": "Ops"})

    assert resp.status_code == 200
    payload = seeded_api.sent("PUT", f"/admin/users/{row['id']}")[0].json()
    assert (payload["status"], payload["department"]) == (sent, "Ops")


@pytest.mark.asyncio
async def test_staff_edit_keeps_reserved_domain_email(
    admin: AsyncClient, seeded_api: FakeMarketplace
) -> None:
    resp = await admin.put("/staff/4", json={"department": "Ops"})

    assert resp.status_code == 200
    assert resp.json()["data"]["email"] == "omar@sawa.test"
    assert resp.json()["data"]["department"] == "Ops"


@pytest.mark.asyncio
async def test_user_edit_of_employee_keeps_role(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.put("/users/4", json={"last_name": "Saleem"})

    assert resp.status_code == 200
    assert resp.json()["data"]["role"] == "employee"
    assert resp.json()["data"]["full_name"] == "Omar Saleem"


@pytest.mark.asyncio
async def test_user_edit_rejects_malformed_email(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.put("/users/3", json={"email": "not-an-email"})

    assert resp.status_code == 422
    assert list(resp.json()["error"]["fields"]) == ["email"]
    assert seeded_api.sent("PUT") == []


@pytest.mark.asyncio
async def test_partial_localized_edit_keeps_other_language(
    admin: AsyncClient, seeded_api: FakeMarketplace
) -> None:
    resp = await admin.put("/features/2", json={"name": {"en": "Car park"}})

    assert resp.status_code == 200
    assert seeded_api.sent("PUT", "/admin/features/2")[0].json()["name"] == {
        "ar": "موقف سيارات",
        "en": "Car park",
    }


# ---------------------------------------------------------------------------
# 7. Platform settings and the admin profile
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_settings_screen(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.get("/settings")
    assert resp.json()["total"] == 3

    resp = await admin.put("/settings/2", json={"value": "12.5"})
    assert resp.status_code == 200
    assert resp.json()["data"]["value"] == "12.5"

    resp = await admin.post("/settings", json={"key": "support_phone", "value": "0944000000"})
    assert resp.status_code == 201

    assert (await admin.delete("/settings/1")).status_code == 405


@pytest.mark.asyncio
async def test_bool_setting_accepts_only_flags(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.put("/settings/3", json={"value": "yes"})

    assert resp.status_code == 422
    assert resp.json()["error"]["fields"] == {"__root__": "value must be 0 or 1"}
    assert seeded_api.sent("PUT") == []


@pytest.mark.asyncio
async def test_profile_edit_is_partial(admin: AsyncClient, backend: FakeMarketplace) -> None:
    resp = await admin.get("/profile")
    assert resp.json()["data"]["email"] == "admin@sawa.test"

    resp = await admin.put("/profile", json={"bank_details": "IBAN SY00 1234"})

    assert resp.status_code == 200
    assert resp.json()["data"]["bank_details"] == "IBAN SY00 1234"
    assert resp.json()["data"]["first_name"] == backend.profile["first_name"]
    assert resp.json()["toasts"][0]["title"] == "Saved"


@pytest.mark.asyncio
async def test_profile_password_change(admin: AsyncClient, backend: FakeMarketplace) -> None:
    body = {"old_password": "wrong-password", "password": "n3w-pass", "password_confirmation": "n3w-pass"}
    resp = await admin.post("/profile/password", json=body)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "The old password is incorrect"

    resp = await admin.post("/profile/password", json={**body, "old_password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    assert resp.json()["toasts"][0]["title"] == "Password changed"
    assert backend.password == "n3w-pass"


@pytest.mark.asyncio
async def test_profile_password_mismatch_sends_nothing(
    admin: AsyncClient, backend: FakeMarketplace
) -> None:
    resp = await admin.post(
        "/profile/password",
        json={"old_password": ADMIN_PASSWORD, "password": "n3w-pass", "password_confirmation": "other"},
    )

    assert resp.status_code == 422
    assert "password_confirmation" in resp.json()["error"]["fields"]
    assert backend.sent("PUT") == []


# ---------------------------------------------------------------------------
# 8. Listing calendar, house rules and ownership
# ---------------------------------------------------------------------------
@pytest.mark.asyncio
async def test_listing_availability(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.put(
        "/listings/1/available-dates", json={"not_available_dates": ["2025-08-01", "2025-08-02"]}
    )
    assert resp.status_code == 200
    assert resp.json()["toasts"][0]["title"] == "Availability updated"

    await admin.put("/listings/1/available-dates", json={"removed_not_available_dates": ["2025-08-01"]})

    assert seeded_api.tables["listings"][1]["not_available_dates"] == ["2025-08-02"]


@pytest.mark.asyncio
async def test_listing_availability_rejects_overlap(
    admin: AsyncClient, seeded_api: FakeMarketplace
) -> None:
    resp = await admin.put(
        "/listings/1/available-dates",
        json={"not_available_dates": ["2025-08-01"], "removed_not_available_dates": ["2025-08-01"]},
    )

    assert resp.status_code == 422
    assert seeded_api.sent("PUT") == []


@pytest.mark.asyncio
async def test_listing_rules(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.put(
        "/listings/1/rules", json={"remove_shoes": True, "quiet_hours": {"ar": "بعد العاشرة"}}
    )

    assert resp.status_code == 200
    rules = seeded_api.sent("PUT", "/admin/listings/1/rules")[0].json()
    assert rules["remove_shoes"] == 1
    assert rules["no_extra_guests"] == 0
    assert rules["check_in_time"] == "14:00"
    assert rules["quiet_hours"] == {"ar": "بعد العاشرة"}


@pytest.mark.asyncio
async def test_listing_rules_reject_bad_time(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.put("/listings/1/rules", json={"check_out_time": "25:00"})

    assert resp.status_code == 422
    assert list(resp.json()["error"]["fields"]) == ["check_out_time"]


@pytest.mark.asyncio
async def test_change_listing_owner(admin: AsyncClient, seeded_api: FakeMarketplace) -> None:
    resp = await admin.post("/listings/1/owner", json={"host_id": 2})

    assert resp.status_code == 200
    assert resp.json()["data"]["host_id"] == 2
    assert seeded_api.sent("PUT", "/admin/listings/1")[0].json() == {"host_id": 2}

    resp = await admin.post("/listings/1/owner", json={"host_id": 2})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "The selected host already owns this listing"
