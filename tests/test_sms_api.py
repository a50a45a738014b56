import httpx


# ---------------------------------------------------------------- health

def test_root_reports_service(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "running", "service": "BulkSMSBD Proxy"}


def test_live(client):
    assert client.get("/live").json() == {"status": "alive"}


# ---------------------------------------------------------------- balance

def test_balance_passes_through_payload(client, gateway):
    gateway.body = {"response_code": 202, "balance": 512.25}

    response = client.get("/api/balance")

    assert response.status_code == 200
    assert response.json() == {"success": True, "data": {"response_code": 202, "balance": 512.25}}
    assert gateway.last_path == "/api/getBalanceApi"
    assert gateway.last_params == {"api_key": "test-api-key"}


def test_balance_timeout_is_500(client, gateway):
    gateway.error = httpx.ReadTimeout("timed out")

    response = client.get("/api/balance")

    assert response.status_code == 500
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "TRANSPORT_ERROR"
    assert "timed out" in data["error"]


# ---------------------------------------------------------------- single send

def test_send_sms_success(client, gateway):
    response = client.post("/api/send-sms", json={"number": "01712345678", "message": "Hello"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["code"] == "202"
    assert data["message"] == "SMS Submitted Successfully"
    assert gateway.last_path == "/api/smsapi"
    assert gateway.last_params == {
        "api_key": "test-api-key",
        "type": "text",
        "number": "8801712345678",
        "senderid": "8809612345678",
        "message": "Hello",
    }


def test_send_sms_uses_caller_sender_id(client, gateway):
    client.post("/api/send-sms", json={"number": "01712345678", "message": "Hi", "senderid": "MYBRAND"})
    assert gateway.last_params["senderid"] == "MYBRAND"


def test_send_sms_accepts_numeric_number(client, gateway):
    response = client.post("/api/send-sms", json={"number": 1712345678, "message": "Hi"})
    assert response.status_code == 200
    assert gateway.last_params["number"] == "881712345678"


def test_send_sms_unicode_type(client, gateway):
    client.post("/api/send-sms", json={"number": "01712345678", "message": "আপনার অর্ডার পাঠানো হয়েছে"})
    assert gateway.last_params["type"] == "unicode"


def test_send_sms_business_error_is_200(client, gateway):
    gateway.body = {"response_code": 1032}

    response = client.post("/api/send-sms", json={"number": "01712345678", "message": "Hello"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "1032"
    assert data["message"].startswith("IP Not whitelisted")
    assert data["data"] == {"response_code": 1032}


def test_send_sms_bare_error_code(client, gateway):
    gateway.body = "1007"

    data = client.post("/api/send-sms", json={"number": "01712345678", "message": "Hello"}).json()

    assert data["success"] is False
    assert data["code"] == "1007"
    assert data["message"] == "Balance Insufficient"


def test_send_sms_requires_number_and_message(client, gateway):
    for body in ({"message": "Hello"}, {"number": "01712345678"}, {"number": "", "message": "Hi"}, {}):
        response = client.post("/api/send-sms", json=body)
        assert response.status_code == 400
        assert response.json()["error"] == "Number and message are required"
    assert gateway.requests == []


def test_send_sms_unicode_over_70_rejected(client, gateway):
    response = client.post("/api/send-sms", json={"number": "01712345678", "message": "আ" * 71})

    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "VALIDATION_ERROR"
    assert "70" in data["error"]
    assert "Unicode" in data["error"]
    assert gateway.requests == []


def test_send_sms_text_limit_is_160(client, gateway):
    assert client.post("/api/send-sms", json={"number": "01712345678", "message": "a" * 160}).status_code == 200

    response = client.post("/api/send-sms", json={"number": "01712345678", "message": "a" * 161})
    assert response.status_code == 400
    assert "160" in response.json()["error"]


def test_send_sms_short_number_is_forwarded(client, gateway):
    # Single sends do not apply the 10-digit minimum used for bulk sends
    response = client.post("/api/send-sms", json={"number": "12345", "message": "Hi"})
    assert response.status_code == 200
    assert gateway.last_params["number"] == "8812345"


def test_send_sms_connection_reset(client, gateway):
    gateway.error = httpx.ReadError("[Errno 104] Connection reset by peer")

    response = client.post("/api/send-sms", json={"number": "01712345678", "message": "Hello"})

    assert response.status_code == 500
    data = response.json()
    assert data["success"] is False
    assert data["code"] == "TRANSPORT_ERROR"
    assert "Connection reset" in data["error"]


def test_send_sms_upstream_5xx(client, gateway):
    gateway.status_code = 503
    gateway.body = "maintenance"

    response = client.post("/api/send-sms", json={"number": "01712345678", "message": "Hello"})

    assert response.status_code == 500
    assert response.json()["error"] == "SMS gateway responded with HTTP 503 Service Unavailable"


# ---------------------------------------------------------------- bulk send

def test_bulk_send_success(client, gateway):
    numbers = ["01712345678", "8801812345678", "123", None, "+880 1912-345678"]

    response = client.post("/api/send-sms-bulk", json={"numbers": numbers, "message": "Office closed"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["code"] == "202"
    assert data["count"] == 3
    assert data["originalCount"] == 5
    assert data["invalidCount"] == 2
    assert gateway.last_params["number"] == "8801712345678,8801812345678,8801912345678"
    assert gateway.last_params["type"] == "text"


def test_bulk_send_business_error_keeps_counts(client, gateway):
    gateway.body = {"response_code": 1007, "error_message": "Balance Insufficient"}

    data = client.post("/api/send-sms-bulk", json={"numbers": ["01712345678"], "message": "Hi"}).json()

    assert data["success"] is False
    assert data["code"] == "1007"
    assert data["count"] == 1
    assert data["invalidCount"] == 0


def test_bulk_send_requires_array_and_message(client, gateway):
    for body in ({"message": "Hi"}, {"numbers": "01712345678", "message": "Hi"}, {"numbers": ["01712345678"]}):
        response = client.post("/api/send-sms-bulk", json=body)
        assert response.status_code == 400
        assert response.json()["error"] == "Numbers (array) and message are required"
    assert gateway.requests == []


def test_bulk_send_empty_array(client):
    response = client.post("/api/send-sms-bulk", json={"numbers": [], "message": "Hi"})
    assert response.status_code == 400
    assert response.json()["error"] == "Numbers array cannot be empty"


def test_bulk_send_over_cap(client, gateway):
    numbers = ["01712345678"] * 101

    response = client.post("/api/send-sms-bulk", json={"numbers": numbers, "message": "Hi"})

    assert response.status_code == 400
    data = response.json()
    assert "100" in data["error"]
    assert "101" in data["error"]
    assert data["details"] == {"limit": 100, "received": 101}
    assert gateway.requests == []


def test_bulk_send_exactly_100_allowed(client):
    response = client.post("/api/send-sms-bulk", json={"numbers": ["01712345678"] * 100, "message": "Hi"})
    assert response.status_code == 200
    assert response.json()["count"] == 100


def test_bulk_send_all_invalid(client, gateway):
    response = client.post("/api/send-sms-bulk", json={"numbers": ["123", "4567", None, ""], "message": "Hi"})

    assert response.status_code == 400
    assert response.json()["error"] == "No valid phone numbers found in the array"
    assert gateway.requests == []


def test_bulk_send_unicode_too_long(client):
    response = client.post("/api/send-sms-bulk", json={"numbers": ["01712345678"], "message": "ক" * 71})
    assert response.status_code == 400
    assert "70" in response.json()["error"]


def test_bulk_send_request_too_large(client, gateway):
    numbers = ["01" + "7" * 18] * 90

    response = client.post("/api/send-sms-bulk", json={"numbers": numbers, "message": "Hi"})

    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Request too large. Reduce number of recipients or message length."
    assert data["details"]["estimated_size"] > 2000
    assert gateway.requests == []


def test_bulk_send_dns_failure(client, gateway):
    gateway.error = httpx.ConnectError("[Errno -2] Name or service not known")

    response = client.post("/api/send-sms-bulk", json={"numbers": ["01712345678"], "message": "Hi"})

    assert response.status_code == 500
    assert "could not be reached" in response.json()["error"]
