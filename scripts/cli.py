"""
CLI for the camera client: open the live window, or send one image for detection.
"""
from __future__ import annotations
import argparse, json, logging, sys
import cv2
from core.config import Settings
from core.client import DetectionClient
from core.errors import DetectionRequestError
from core.live import run_live_overlay
from core.presentation import format_results, to_views
from core.sampler import encode_frame

def detect_image(path: str, settings: Settings, as_json: bool = False) -> int:
    frame = cv2.imread(path)
    if frame is None:
        print(f"Could not read image: {path}", file=sys.stderr)
        return 2
    client = DetectionClient(settings.DETECT_URL, timeout=settings.REQUEST_TIMEOUT)
    try:
        results = client.detect(encode_frame(frame, settings.JPEG_QUALITY))
    except DetectionRequestError as e:
        logging.getLogger(__name__).error(f"[cli] {e}")
        return 1
    if as_json:
        print(json.dumps([v.model_dump() for v in to_views(results)], indent=2, ensure_ascii=False))
    else:
        print(format_results(results))
    return 0

def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Mask Guard camera client")
    p.add_argument("--url", default=None, help="Detection endpoint (overrides DETECT_URL)")
    sub = p.add_subparsers(dest="command", required=True)

    live = sub.add_parser("live", help="Open the camera window")
    live.add_argument("--camera", type=int, default=None, help="Camera index")
    live.add_argument("--autostart", action="store_true", help="Open the camera immediately")

    det = sub.add_parser("detect", help="Send one image file and print the results")
    det.add_argument("--image", required=True, help="Path to an image")
    det.add_argument("--json", action="store_true", help="Print results as JSON")

    args = p.parse_args(argv)

    settings = Settings() if args.url is None else Settings(DETECT_URL=args.url)
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))

    if args.command == "live":
        run_live_overlay(settings, camera_index=args.camera, autostart=args.autostart)
        return 0
    return detect_image(args.image, settings, as_json=args.json)

if __name__ == "__main__":
    sys.exit(main())
