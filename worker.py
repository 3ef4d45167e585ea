# worker.py
from prefect import serve
from app.config import configure_logging, settings
from app.flows import run_reseed

if __name__ == "__main__":
    configure_logging()

    # Scheduled wipe-and-reload of the transactions table from the upstream source.
    reseed = run_reseed.to_deployment(
        name="transaction-reseed",
        tags=["seed", "cron"],
        cron=settings.RESEED_CRON,
        description="Replaces all transactions with the upstream seed dataset."
    )

    serve(reseed, limit=1, pause_on_shutdown=False)
