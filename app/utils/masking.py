def mask_payment_details(type_: str, details: dict) -> dict:
    """Return a copy of ``details`` safe to send to clients."""
    masked = dict(details)
    if type_ == "card" and masked.get("card_number"):
        masked["card_number"] = f"****-****-****-{masked['card_number'][-4:]}"
    elif type_ == "paypal" and masked.get("paypal_email"):
        username, _, domain = masked["paypal_email"].partition("@")
        masked["paypal_email"] = f"{username[:2]}***@{domain}"
    elif type_ == "wallet" and masked.get("wallet_id"):
        masked["wallet_id"] = f"***{masked['wallet_id'][-4:]}"
    return masked


__all__ = ["mask_payment_details"]
