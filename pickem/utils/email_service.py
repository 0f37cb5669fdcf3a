"""
Email Service for the pick'em pool

Sends users a copy of their picks after a successful submission.
"""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from flask import current_app
from markupsafe import escape

logger = logging.getLogger(__name__)


class EmailService:
    """Handles all email sending functionality"""

    def __init__(self):
        self.smtp_server = current_app.config.get("MAIL_SERVER") or "localhost"
        self.smtp_port = current_app.config.get("MAIL_PORT", 587)
        self.smtp_username = current_app.config.get("MAIL_USERNAME")
        self.smtp_password = current_app.config.get("MAIL_PASSWORD")
        self.from_email = current_app.config.get(
            "FROM_EMAIL"
        ) or current_app.config.get("MAIL_USERNAME", "noreply@pickem.local")
        self.from_name = current_app.config.get("FROM_NAME", "NFL Pick'em Pool")
        self.use_tls = current_app.config.get("MAIL_USE_TLS", True)

    def _create_message(self, to_email, subject, body_text, body_html=None):
        """Create email message"""
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self.from_name} <{self.from_email}>"
        msg["To"] = to_email

        msg.attach(MIMEText(body_text, "plain"))

        if body_html:
            msg.attach(MIMEText(body_html, "html"))

        return msg

    def _send_email(self, message):
        """Send email message. Returns True on success."""
        if not self.smtp_username or not self.smtp_password:
            logger.warning("SMTP credentials not configured. Email not sent.")
            return False

        try:
            with smtplib.SMTP(self.smtp_server, self.smtp_port) as server:
                if self.use_tls:
                    server.starttls()
                server.login(self.smtp_username, self.smtp_password)
                server.sendmail(self.from_email, [message["To"]], message.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {message['To']}: {str(e)}")
            return False

        logger.info(f"Email sent successfully to {message['To']}")
        return True

    def send_picks_email(self, user, subject, week, picks):
        """Send a user the picks they currently hold for a week"""
        lines = [
            f"{pick.game.matchup}: {pick.selected_team.abbreviation} ({pick.points})"
            for pick in picks
        ]

        body_text = f"Hi {user.full_name},\n\nYour week {week} picks:\n\n" + "\n".join(
            lines
        )

        rows = "".join(f"<li>{escape(line)}</li>" for line in lines)
        body_html = f"""
        <html>
        <body>
            <p>Hi {escape(user.full_name)},</p>
            <p>Your week {week} picks:</p>
            <ul>{rows}</ul>
        </body>
        </html>
        """

        message = self._create_message(user.email, subject, body_text, body_html)
        return self._send_email(message)
