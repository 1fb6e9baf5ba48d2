"""HTML bodies for the transactional emails. Each builder returns (subject, html)."""

from datetime import datetime, timezone
from html import escape
from typing import Optional, Tuple

LOGO_URL = "https://res.cloudinary.com/drddoxnsi/image/upload/v1746646662/brikvest-logo_uw0zi0.png"

REFERRAL_FRIENDS = 5
REFERRAL_MIN_COMMITMENT = 100_000


def format_naira(amount: int) -> str:
    return f"₦{amount:,}"


def _wrap(greeting_name: str, body_html: str) -> str:
    year = datetime.now(timezone.utc).year
    return f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 30px; background-color: #f9f9f9;">
      <div style="text-align: center; margin-bottom: 20px;">
        <img src="{LOGO_URL}" alt="Brikvest Logo" style="height: 50px;" />
      </div>
      <div style="background: #ffffff; padding: 30px; border-radius: 8px;">
        <h2 style="color: #222;">Hello {escape(greeting_name)},</h2>
        {body_html}
        <p style="margin-top: 40px; font-size: 14px; color: #888;">
          Warm regards,<br /><strong>The Brikvest Team</strong>
        </p>
      </div>
      <div style="text-align: center; font-size: 12px; color: #aaa; margin-top: 20px;">
        &copy; {year} Brikvest. All rights reserved.
      </div>
    </div>
    """


def investment_confirmation(
    full_name: str,
    property_name: str,
    amount: int,
    referral_code: Optional[str] = None,
) -> Tuple[str, str]:
    """Sent after a reservation is recorded. `amount` is units * min_investment."""
    referral_html = ""
    if referral_code:
        referral_html = f"""
        <hr style="margin: 24px 0; border: none; border-top: 1px solid #eee;" />
        <p style="font-size: 16px; color: #444;"><strong>Your Unique Referral Code:</strong>
          <span style="color: #000; font-weight: bold;">{escape(referral_code)}</span></p>
        <p style="font-size: 14px; color: #666;">
          Share this code with at least {REFERRAL_FRIENDS} friends. Each friend must commit to invest
          {format_naira(REFERRAL_MIN_COMMITMENT)} or more. Once all {REFERRAL_FRIENDS} investments are verified,
          you'll receive <strong>10% of each investment</strong> as equity in {escape(property_name)} or cash rewards.
        </p>
        """

    body = f"""
        <p style="font-size: 16px; color: #444;">
          Thank you for submitting your interest to invest <strong>{format_naira(amount)}</strong>
          in the <strong>{escape(property_name)}</strong> property.
        </p>
        <p style="font-size: 16px; color: #444;">
          We are currently securing our licensing from the Securities and Exchange Commission (SEC).
          We will only begin collecting investment funds once licensing is complete, and you'll be
          notified as soon as the platform is ready to accept payments.
        </p>
        {referral_html}
    """
    return "Your Investment Confirmation - Brikvest", _wrap(full_name, body)


def developer_bid_acknowledgement(developer_name: str, company_name: str) -> Tuple[str, str]:
    body = f"""
        <p style="font-size: 16px; color: #444;">
          Thank you for submitting a development proposal on behalf of <strong>{escape(company_name)}</strong>.
        </p>
        <p style="font-size: 16px; color: #444;">
          Our team is reviewing all proposals and will reach out shortly to begin the due diligence
          phase of the selection process.
        </p>
    """
    return "Your Development Proposal - Brikvest", _wrap(developer_name, body)
