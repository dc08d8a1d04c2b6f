"""Simple entrypoint to run the wardrobe recommender locally."""

import argparse
import json

from evaluation.harness import run_smoke_checks
from wardrobe_app.app import WardrobeApp


def main() -> None:
    parser = argparse.ArgumentParser(description="Outfit recommendations from a local wardrobe database.")
    parser.add_argument("user_id", nargs="?", help="User whose wardrobe should be matched")
    parser.add_argument("--occasion", help="Only keep outfits suited to this occasion")
    parser.add_argument("--smoke", action="store_true", help="Run the evaluation scenarios instead")
    args = parser.parse_args()

    if args.smoke or not args.user_id:
        for line in run_smoke_checks():
            print(line)
        return

    app = WardrobeApp()
    print(json.dumps(app.recommend(args.user_id, occasion=args.occasion), indent=2))


if __name__ == "__main__":
    main()
