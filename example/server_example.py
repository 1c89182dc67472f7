from reseller_sdk import CallbackServer, ClientSettings, setup_logger


setup_logger(level="DEBUG")
settings = ClientSettings.from_env()

# Callbacks are signed with the user secret returned by auth()/user()
app = CallbackServer(
    secret=settings.user_secret,
    callback_path="/reseller/callback",
    title="Reseller callbacks",
)


@app.on_callback
async def on_order_update(payload):
    """Only reached when the Signature header matched."""
    print(f"Order {payload.get('order_number')} is now {payload.get('status')}")
    return {"received": True}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="localhost", port=8000, log_level="debug")
