#!/usr/bin/env python
"""Create a demo event and issue one certificate for it.

Usage:
  python scripts/seed_demo_event.py --template certificate-templates/sample --email ada@example.com
"""
import argparse
import asyncio
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.database import database
from app.schemas.event import CreateEventRequest
from app.services.certificate_service import CertificateService, build_verification_url
from app.services.event_service import EventService


async def seed(template: str, name: str, email: str):
    await database.connect()
    try:
        event = await EventService.create_event(CreateEventRequest(
            name="Hackathon 2024",
            templateUrl=template,
            textX=400,
            textY=250,
            fontSize=50,
            fontFamily="Roboto",
            fontColor="000000",
        ))
        print(f"Event created: {event['id']}")

        certificates = await CertificateService.generate_certificates(
            event["id"], [{"name": name, "email": email}]
        )
        for cert in certificates:
            print(f"Certificate: {cert['cloudinary_url']}")
            print(f"Verify at:   {build_verification_url(cert['certificate_uuid'])}")
    finally:
        await database.disconnect()


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--template", required=True, help="Cloudinary public id of the template image")
    parser.add_argument("--name", default="Ada Lovelace")
    parser.add_argument("--email", default="ada@example.com")
    args = parser.parse_args()

    asyncio.run(seed(args.template, args.name, args.email))


if __name__ == "__main__":
    main()
