"""HTML email templates.

Placeholders use ``string.Template`` syntax so the inline CSS braces need no
escaping. Every user-supplied value goes through ``escape_html`` before it is
substituted; free text additionally goes through ``multiline_html``.
"""

import html
from datetime import datetime, timezone
from string import Template
from typing import Optional


def escape_html(value) -> str:
    """Escape &, <, >, " and ' so user input cannot inject markup."""
    return html.escape(str(value), quote=True).replace("&#x27;", "&#39;")


def multiline_html(value) -> str:
    return escape_html(value).replace("\r\n", "\n").replace("\n", "<br/>")


_BASE_STYLE = """
            body {
              font-family: 'Helvetica', 'Arial', sans-serif;
              line-height: 1.6;
              color: #333333;
              background-color: #f9f8ff;
              margin: 0;
              padding: 0;
            }
            .email-container {
              max-width: 600px;
              margin: 0 auto;
              background-color: #ffffff;
              border-radius: 8px;
              overflow: hidden;
              box-shadow: 0 4px 20px rgba(123, 104, 238, 0.15);
            }
            .email-header {
              background: linear-gradient(135deg, #7b68ee 0%, #6a5acd 100%);
              color: white;
              padding: 30px 20px;
              text-align: center;
            }
            .email-header h1 {
              margin: 0;
              font-size: 24px;
              font-weight: 700;
            }
            .email-body {
              padding: 30px;
            }
            .message-content {
              background-color: #f9f8ff;
              padding: 15px;
              border-radius: 8px;
              border-left: 4px solid #7b68ee;
            }
            .email-footer {
              background-color: #f0f0f0;
              padding: 20px;
              text-align: center;
              font-size: 14px;
              color: #666666;
            }"""

CONTACT_NOTIFICATION = Template("""<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>New Contact Form Submission</title>
    <style>$base_style
            .email-body h2 {
              color: #7b68ee;
              margin-top: 0;
              font-size: 20px;
              border-bottom: 2px solid #ff8c69;
              padding-bottom: 10px;
              margin-bottom: 20px;
            }
            .contact-details {
              background-color: #f5f7fa;
              padding: 15px;
              border-radius: 8px;
              margin-bottom: 20px;
            }
            .contact-details strong {
              color: #7b68ee;
            }
    </style>
  </head>
  <body>
    <div class="email-container">
      <div class="email-header">
        <h1>New Contact Form Submission</h1>
      </div>
      <div class="email-body">
        <h2>Someone has sent you a message</h2>
        <div class="contact-details">
          <p><strong>Name:</strong> $name</p>
          <p><strong>Email:</strong> $email</p>
          <p><strong>Subject:</strong> $subject</p>
        </div>
        <h2>Message</h2>
        <div class="message-content">
          <p>$message</p>
        </div>
      </div>
      <div class="email-footer">
        <p>This message was sent from $site_name.</p>
      </div>
    </div>
  </body>
</html>
""")

CONTACT_CONFIRMATION = Template("""<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Thank you for contacting $site_name</title>
    <style>$base_style
            .email-header h1 {
              font-size: 28px;
              font-family: 'Georgia', serif;
            }
            .email-header p {
              margin: 10px 0 0;
              font-style: italic;
              opacity: 0.9;
            }
            .greeting {
              font-size: 18px;
              color: #7b68ee;
              margin-bottom: 20px;
            }
            .signature {
              margin-top: 30px;
              padding-top: 20px;
              border-top: 1px solid #eee;
            }
    </style>
  </head>
  <body>
    <div class="email-container">
      <div class="email-header">
        <h1>$site_name</h1>
        <p>Dreaming in melody...</p>
      </div>
      <div class="email-body">
        <p class="greeting">Dear $name,</p>
        <p>Thank you for reaching out to us! We have received your message and will get back to you as soon as possible.</p>
        <div class="message-content">
          <h3>Your Message</h3>
          <p><strong>Subject:</strong> $subject</p>
          <p>$message</p>
        </div>
        <p>We appreciate your interest in $site_name and look forward to connecting with you.</p>
        <div class="signature">
          <p><strong>Best regards,</strong></p>
          <p>The $site_name Team</p>
        </div>
      </div>
      <div class="email-footer">
        <p>&copy; $year $site_name. All rights reserved.</p>
        <p>$site_location</p>
      </div>
    </div>
  </body>
</html>
""")

PASSWORD_RESET = Template("""<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Reset Your Password</title>
    <style>$base_style
            .greeting {
              font-size: 18px;
              margin-bottom: 20px;
            }
            .reset-button {
              display: block;
              max-width: 280px;
              margin: 30px auto;
              padding: 12px 24px;
              background-color: #7b68ee;
              color: white;
              text-align: center;
              text-decoration: none;
              border-radius: 5px;
              font-weight: 600;
            }
            .warning {
              background-color: #fff8e6;
              border-left: 4px solid #ff8c69;
              padding: 15px;
              margin: 20px 0;
              font-size: 14px;
            }
    </style>
  </head>
  <body>
    <div class="email-container">
      <div class="email-header">
        <h1>Reset Your Password</h1>
      </div>
      <div class="email-body">
        <p class="greeting">Hello $username,</p>
        <p>We received a request to reset your password for the $site_name admin panel. Click the button below to set a new password:</p>
        <a href="$reset_url" class="reset-button">Reset Password</a>
        <p>If you didn't request a password reset, you can safely ignore this email. The link will expire in $expires_minutes minutes.</p>
        <div class="warning">
          <p>For security reasons, please do not share this link with anyone.</p>
        </div>
      </div>
      <div class="email-footer">
        <p>&copy; $year $site_name. All rights reserved.</p>
      </div>
    </div>
  </body>
</html>
""")


def _current_year(now: Optional[datetime] = None) -> int:
    return (now or datetime.now(timezone.utc)).year


def render_contact_notification(name, email, subject, message, site_name: str) -> str:
    return CONTACT_NOTIFICATION.substitute(
        base_style=_BASE_STYLE,
        name=escape_html(name),
        email=escape_html(email),
        subject=escape_html(subject),
        message=multiline_html(message),
        site_name=escape_html(site_name),
    )


def render_contact_confirmation(name, subject, message, site_name: str, site_location: str) -> str:
    return CONTACT_CONFIRMATION.substitute(
        base_style=_BASE_STYLE,
        name=escape_html(name),
        subject=escape_html(subject),
        message=multiline_html(message),
        site_name=escape_html(site_name),
        site_location=escape_html(site_location),
        year=_current_year(),
    )


def render_password_reset(username, reset_url: str, expires_minutes: int, site_name: str) -> str:
    return PASSWORD_RESET.substitute(
        base_style=_BASE_STYLE,
        username=escape_html(username),
        reset_url=escape_html(reset_url),
        expires_minutes=expires_minutes,
        site_name=escape_html(site_name),
        year=_current_year(),
    )
