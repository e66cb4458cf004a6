from recruitment.core.config import settings
from recruitment.notifications.email_service import EmailService


def test_status_email_escapes_user_supplied_text(email_service):
    email_service.send_application_status_email(
        "jane@example.com",
        "<b>Jane</b>",
        '<a href="https://evil.example">Backend</a>\nEngineer',
        "ACCEPTED",
    )

    message = email_service.sent_to("jane@example.com")[-1]
    assert "<a href" not in message["html"]
    assert "<b>Jane</b>" not in message["html"]
    assert "&lt;a href=&quot;https://evil.example&quot;&gt;" in message["html"]
    assert "&lt;b&gt;Jane&lt;/b&gt;" in message["html"]
    assert "\n" not in message["subject"]


def test_welcome_and_activation_emails_escape_names(email_service):
    email_service.send_welcome_email("hr@acme.com", "<script>alert(1)</script>", "COMPANY")
    email_service.send_company_activated_email("hr@acme.com", "Acme <img src=x>")

    welcome, activated = email_service.sent_to("hr@acme.com")
    assert "<script>" not in welcome["html"]
    assert "&lt;script&gt;" in welcome["html"]
    assert "<img" not in activated["html"]
    assert "Acme &lt;img src=x&gt;" in activated["html"]


def test_unconfigured_smtp_only_logs():
    assert not settings.SMTP_CONFIGURED
    EmailService(settings).send_email("jane@example.com", "Hello", "<p>Hi</p>")
