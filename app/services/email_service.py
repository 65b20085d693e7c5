"""
Email Service
Certificate notification emails through Resend or SMTP
"""

import logging
import uuid
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid
from html import escape
from typing import Optional

import aiosmtplib
import httpx
from fastapi import HTTPException, status

from app.config import settings

logger = logging.getLogger("certificate_pro.email")


def certificate_subject(event_name: str) -> str:
    return f"Your Certificate for {event_name}"


def render_certificate_email(
    participant_name: str,
    event_name: str,
    certificate_url: str,
    verification_url: str,
    custom_message: Optional[str] = None
) -> tuple[str, str]:
    """
    Build the HTML and plain text bodies of a certificate email

    Returns:
        (html_body, text_body)
    """
    name = escape(participant_name)
    event = escape(event_name)
    download_href = escape(certificate_url, quote=True)
    verify_href = escape(verification_url, quote=True)
    year = datetime.now().year

    message_block = ""
    if custom_message:
        message_block = f'<div class="message-box">{escape(custom_message)}</div>'

    html_body = f"""
    <!DOCTYPE html>
    <html>
      <head>
        <style>
          body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
          .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
          .header {{ background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 30px; text-align: center; border-radius: 10px 10px 0 0; }}
          .content {{ background: #f9f9f9; padding: 30px; border-radius: 0 0 10px 10px; }}
          .button {{ display: inline-block; padding: 12px 30px; background: #667eea; color: white; text-decoration: none; border-radius: 5px; margin: 10px 5px; }}
          .footer {{ text-align: center; margin-top: 20px; font-size: 12px; color: #666; }}
          .message-box {{ background: #fff; border-left: 4px solid #667eea; padding: 15px; margin: 20px 0; font-style: italic; }}
        </style>
      </head>
      <body>
        <div class="container">
          <div class="header">
            <h1>Congratulations {name}!</h1>
          </div>
          <div class="content">
            <p>You have successfully completed <strong>{event}</strong>!</p>

            {message_block}

            <p>Your certificate of completion is now ready for download.</p>

            <div style="text-align: center; margin: 30px 0;">
              <a href="{download_href}" class="button">Download Certificate</a>
              <a href="{verify_href}" class="button">Verify Certificate</a>
            </div>

            <p><strong>What you can do:</strong></p>
            <ul>
              <li>Download your certificate and share it on social media</li>
              <li>Add it to your LinkedIn profile</li>
              <li>Use the verification link to prove authenticity</li>
            </ul>

            <p style="margin-top: 30px; padding: 15px; background: #e3f2fd; border-left: 4px solid #2196f3; border-radius: 4px;">
              <strong>Pro Tip:</strong> Your certificate has a unique verification code. Anyone can verify its authenticity using the verification link above.
            </p>
          </div>
          <div class="footer">
            <p>This is an automated email. Please do not reply.</p>
            <p>&copy; {year} {escape(settings.APP_NAME)}. All rights reserved.</p>
          </div>
        </div>
      </body>
    </html>
    """

    note = f"\n{custom_message}\n" if custom_message else ""
    text_body = f"""
Congratulations {participant_name}!

You have successfully completed {event_name}!
{note}
Your certificate of completion is now ready for download.

Download: {certificate_url}
Verify: {verification_url}

Your certificate has a unique verification code. Anyone can verify its
authenticity using the verification link above.

This is an automated email. Please do not reply.
    """

    return html_body, text_body


class EmailService:
    """Service for sending certificate emails"""

    @staticmethod
    async def _send_resend(to: str, subject: str, html_body: str, text_body: str) -> str:
        try:
            async with httpx.AsyncClient(timeout=15) as client:
                resp = await client.post(
                    settings.RESEND_API_URL,
                    headers={"Authorization": f"Bearer {settings.RESEND_API_KEY}"},
                    json={
                        "from": settings.RESEND_FROM_EMAIL,
                        "to": [to],
                        "subject": subject,
                        "html": html_body,
                        "text": text_body
                    }
                )
        except httpx.HTTPError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Email provider unreachable: {e}"
            )

        if resp.status_code not in (200, 201, 202):
            try:
                detail = resp.json().get("message") or resp.text
            except ValueError:
                detail = resp.text
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Email provider error: {detail}"
            )

        return resp.json().get("id")

    @staticmethod
    async def _send_smtp(to: str, subject: str, html_body: str, text_body: str) -> str:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = settings.EMAIL_FROM
        message["To"] = to
        message_id = make_msgid()
        message["Message-ID"] = message_id

        message.attach(MIMEText(text_body, "plain"))
        message.attach(MIMEText(html_body, "html"))

        try:
            async with aiosmtplib.SMTP(hostname=settings.SMTP_HOST, port=settings.SMTP_PORT) as smtp:
                if settings.SMTP_USER and settings.SMTP_PASSWORD:
                    await smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
                await smtp.sendmail(settings.EMAIL_FROM, [to], message.as_string())
        except aiosmtplib.SMTPException as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Email provider error: {e}"
            )

        return message_id

    @staticmethod
    def is_configured() -> bool:
        if settings.EMAIL_PROVIDER == "smtp":
            return bool(settings.SMTP_HOST)
        return bool(settings.RESEND_API_KEY)

    @staticmethod
    async def send_certificate_email(
        to: str,
        participant_name: str,
        event_name: str,
        certificate_url: str,
        verification_url: str,
        custom_message: Optional[str] = None
    ) -> str:
        """
        Send one certificate email

        Args:
            to: Recipient email
            participant_name: Name shown in the greeting
            event_name: Event the certificate was issued for
            certificate_url: Forced-download URL of the certificate image
            verification_url: Public verification page
            custom_message: Optional organizer note

        Returns:
            Provider message id

        Raises:
            HTTPException 500: provider rejected the message
        """
        subject = certificate_subject(event_name)
        html_body, text_body = render_certificate_email(
            participant_name, event_name, certificate_url, verification_url, custom_message
        )

        if not EmailService.is_configured():
            # Development mode - no provider configured
            message_id = f"dev-{uuid.uuid4()}"
            logger.info("[EMAIL-STUB] to=%s subject=\"%s\" id=%s", to, subject, message_id)
            logger.debug("Body:\n%s", text_body)
            return message_id

        if settings.EMAIL_PROVIDER == "smtp":
            message_id = await EmailService._send_smtp(to, subject, html_body, text_body)
        else:
            message_id = await EmailService._send_resend(to, subject, html_body, text_body)

        logger.info("[EMAIL-SENT] to=%s subject=\"%s\" id=%s", to, subject, message_id)
        return message_id


# Create singleton instance
email_service = EmailService()
