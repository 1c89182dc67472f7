from reseller_sdk import ResellerClient, ClientSettings, JsonSettingsStore, setup_logger

# Data below is illustrative only, replace it with your own.
setup_logger(level="DEBUG")

store = JsonSettingsStore("reseller_settings.json")
client = ResellerClient.from_store(store, settings=ClientSettings.from_env())


def main():
    if not client.get_token():
        credentials = client.auth("reseller@email.com", "password")
        if credentials is None:
            print("Authentication failed")
            return
        client.persist()

    user = client.user()
    print("User:", user)

    print("Categories:", client.categories())
    print("Offers in category 3:", client.offers({"category_id": 3}))
    print("Discounted offers:", client.offers({"discount": 1}))
    print("Offer 200:", client.offer(200))

    # Simple offer, sandbox order
    print(client.buy("offer", {"quantity": 20, "offer_id": 142, "sandbox": 1}))

    # Reviews written by us, one per line
    print(client.buy("review", {
        "quantity": 100,
        "offer_id": 200,
        "url": "https://your-place-for-reviews.com/",
        "reviews": "review1\nreview2\nreview3",
        "sandbox": 1,
    }))

    # Installs with reviews uploaded from a file
    print(client.buy("install", {
        "quantity": 50,
        "offer_id": 321,
        "app_link": "https://your-place-for-installs.com/",
        "app_id": "some_app_id",
        "days": 30,
        "country": "US",
        "file": "reviews.txt",
        "sandbox": 1,
    }))

    print("Orders:", client.orders())


if __name__ == "__main__":
    main()
