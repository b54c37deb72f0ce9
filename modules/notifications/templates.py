"""
Notification templates.

Each builder returns a ready-to-send EmailMessage. User-supplied values
are HTML-escaped in the HTML body.
"""

from html import escape
from typing import Optional

from pydantic import BaseModel

EMAIL_CSS_STYLES = """
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
    .container { max-width: 600px; margin: 0 auto; padding: 20px; }
    .header { background: #667eea; color: white; padding: 30px; text-align: center; border-radius: 10px 10px 0 0; }
    .content { background: #f9f9f9; padding: 30px; border-radius: 0 0 10px 10px; }
    .content li { margin: 10px 0; }
    .footer { text-align: center; margin-top: 20px; color: #666; font-size: 12px; }
"""

SIGNATURE = "Best regards,\nThe Quiz Website Team"


class EmailMessage(BaseModel):
    """A rendered notification."""

    to: str
    subject: str
    text: str
    html: Optional[str] = None


def _wrap_html(heading: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head><style>{EMAIL_CSS_STYLES}</style></head>
<body>
  <div class="container">
    <div class="header"><h1>{heading}</h1></div>
    <div class="content">
      {body}
      <div class="footer"><p>Best regards,<br>The Quiz Website Team</p></div>
    </div>
  </div>
</body>
</html>"""


def welcome_email(username: str, email: str) -> EmailMessage:
    """Sent once after registration."""
    text = (
        f"Hello {username}!\n\n"
        "Welcome to Quiz Website! We're excited to have you join our community.\n\n"
        "With your new account, you can:\n"
        "- Create your own quizzes\n"
        "- Challenge yourself with quizzes from other users\n"
        "- Track your scores and progress\n\n"
        "Get started by logging in and creating your first quiz!\n\n"
        f"{SIGNATURE}"
    )
    html = _wrap_html(
        "Welcome to Quiz Website!",
        f"""<p>Hello <strong>{escape(username)}</strong>!</p>
      <p>Welcome to Quiz Website! We're excited to have you join our community.</p>
      <p>With your new account, you can:</p>
      <ul>
        <li>Create your own quizzes</li>
        <li>Challenge yourself with quizzes from other users</li>
        <li>Track your scores and progress</li>
      </ul>
      <p>Get started by logging in and creating your first quiz!</p>""",
    )
    return EmailMessage(to=email, subject="Welcome to Quiz Website!", text=text, html=html)


def quiz_created_email(
    username: str,
    email: str,
    title: str,
    description: str,
    question_count: int,
    is_public: bool,
) -> EmailMessage:
    """Sent after a quiz is created."""
    visibility = "Public" if is_public else "Private"
    text = (
        f"Hello {username}!\n\n"
        f'Your quiz "{title}" has been created successfully!\n\n'
        "Quiz Details:\n"
        f"- Title: {title}\n"
        f"- Description: {description or 'No description'}\n"
        f"- Questions: {question_count}\n"
        f"- Visibility: {visibility}\n\n"
        "You can manage your quiz from your dashboard.\n\n"
        f"{SIGNATURE}"
    )
    return EmailMessage(to=email, subject=f"Quiz Created: {title}", text=text)
