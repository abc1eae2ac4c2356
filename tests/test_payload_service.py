from app.services.payload_service import build_contact_draft, parse_webhook


class TestParseWebhook:

    def test_valid_body(self, submission_body):
        webhook = parse_webhook(submission_body)

        assert webhook.form_submission.id == "sub-123"
        assert webhook.form_submission.form_name == "Contact Us"
        assert len(webhook.form_submission.fields) == 4
        assert webhook.website.id == "site-9"

    def test_missing_form_submission(self):
        assert parse_webhook({"website": {"id": "site-9"}}) is None
        assert parse_webhook({"formSubmission": None}) is None

    def test_non_object_bodies(self):
        assert parse_webhook(None) is None
        assert parse_webhook([1, 2]) is None
        assert parse_webhook("formSubmission") is None

    def test_malformed_fields(self):
        assert parse_webhook({"formSubmission": {"fields": "not-a-list"}}) is None

    def test_null_fields_are_empty(self):
        webhook = parse_webhook({"formSubmission": {"id": "s", "fields": None}})
        assert webhook.form_submission.fields == []


class TestBuildContactDraft:

    def test_email_is_preferred_identifier(self, submission_body):
        draft = build_contact_draft(parse_webhook(submission_body))

        assert draft.name == "Jo"
        assert draft.email == "jo@x.com"
        assert draft.phone is None
        assert draft.message == "Hi"
        assert draft.identifier == "jo@x.com"
        assert draft.metadata == {
            "squarespace_form_id": "sub-123",
            "squarespace_form_name": "Contact Us",
            "squarespace_submission_timestamp": "2024-05-01T10:00:00Z",
            "squarespace_site_id": "site-9",
        }

    def test_phone_then_submission_id_fallback(self):
        body = {"formSubmission": {"id": "sub-1", "fields": [{"name": "Phone Number", "value": "555"}]}}
        assert build_contact_draft(parse_webhook(body)).identifier == "555"

        body = {"formSubmission": {"id": "sub-1", "fields": [{"name": "Topic", "value": "x"}]}}
        draft = build_contact_draft(parse_webhook(body))
        assert draft.identifier == "sub-1"
        assert draft.metadata["squarespace_site_id"] is None

    def test_contact_payload_shape(self, submission_body):
        payload = build_contact_draft(parse_webhook(submission_body)).to_contact_payload()
        assert set(payload) == {"name", "email", "identifier", "phone_number", "custom_attributes"}


def test_null_list_email_falls_back_to_phone():
    body = {"formSubmission": {"id": "sub-1", "fields": [
        {"name": "email", "value": [None]},
        {"name": "phone", "value": "555"},
    ]}}

    assert build_contact_draft(parse_webhook(body)).identifier == "555"
