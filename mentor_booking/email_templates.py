"""
MJML Email Templates
Email templates using MJML for responsive, cross-client compatibility
"""

from typing import Optional

THEME = {
    "primary": "#4f46e5",
    "background": "#f8fafc",
    "text_primary": "#0f172a",
    "text_secondary": "#334155",
    "text_muted": "#64748b",
    "border": "#e2e8f0",
    "success": "#16a34a",
}


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    cta_url: Optional[str] = None,
    cta_label: Optional[str] = None,
) -> str:
    """Base MJML template wrapper for all emails"""

    cta_section = ""
    if cta_url and cta_label:
        cta_section = f"""
        <mj-section padding="20px 0">
          <mj-column>
            <mj-button
              href="{cta_url}"
              background-color="{THEME['primary']}"
              color="#ffffff"
              font-weight="600"
              border-radius="8px"
              padding="18px 40px"
              font-size="16px">
              {cta_label}
            </mj-button>
          </mj-column>
        </mj-section>
        """

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="-apple-system, BlinkMacSystemFont, 'Segoe UI', 'Helvetica Neue', Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section background-color="#ffffff" padding="40px 40px 48px 40px">
          <mj-column>
            <mj-text font-size="24px" font-weight="600" color="{THEME['text_primary']}" line-height="1.3" padding="0 0 16px 0">
              {title}
            </mj-text>

            {content_sections}
          </mj-column>
        </mj-section>

        {cta_section}

        <mj-section padding="32px 20px">
          <mj-column>
            <mj-text align="center" font-size="13px" color="#94a3b8" padding="0">
              If you have any questions, just reply to this email.
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def reservation_confirmed_template(
    first_name: str,
    service_title: str,
    scheduled_at: str,
    meeting_link: Optional[str],
) -> str:
    """Payment received / reservation confirmed, sent to the customer"""
    if meeting_link:
        link_section = f"""
    <mj-text>
      To join the meeting click here:<br/>
      <a href="{meeting_link}" style="color: {THEME['primary']};">{meeting_link}</a>
    </mj-text>
    """
    else:
        link_section = """
    <mj-text>
      Your meeting link will be sent to you in a separate email.
    </mj-text>
    """

    content = f"""
    <mj-text>
      Hi {first_name},
    </mj-text>

    <mj-text>
      Your payment was received successfully! 📥
    </mj-text>

    <mj-text color="{THEME['text_primary']}">
      <strong>Service:</strong> {service_title}<br/>
      <strong>Date and time:</strong> {scheduled_at}
    </mj-text>
    {link_section}
    <mj-text>
      See you soon!
    </mj-text>
    """

    return get_base_template(
        title="Your reservation is confirmed ✅",
        preview_text=f"Your reservation for {service_title} is confirmed",
        content_sections=content,
        cta_url=meeting_link,
        cta_label="Join meeting" if meeting_link else None,
    )
