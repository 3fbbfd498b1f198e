# Usage:
#   python script.py <image_path>          decode the QR code in an image
#   python script.py --text "<payload>"    decode a payload string
#   python script.py --zip <file> [code]   decode an offline eKYC archive
import sys

from idqr import DecodeFailure, get_decoder
from idqr.utils.logging import setup_logger

setup_logger()


def print_outcome(outcome):
    if isinstance(outcome, DecodeFailure):
        print(f"\n❌ Decode failed: {outcome.reason.value} {outcome.detail}")
        return 1

    print("\n✅ Decode successful!")
    for key, value in outcome.to_dict().items():
        if key == "national_id_number" and not outcome.is_masked:
            print(f"  {key}: XXXX XXXX {value[-4:]}")  # Masked
        elif key == "photo":
            print(f"  {key}: {len(value)} chars")
        else:
            print(f"  {key}: {value}")
    return 0


def main(argv):
    if len(argv) < 2:
        print("Usage: python script.py <image_path> | --text <payload> | --zip <file> [share_code]")
        return 2

    decoder = get_decoder()

    if argv[1] == "--text" and len(argv) > 2:
        return print_outcome(decoder.decode(argv[2]))

    if argv[1] == "--zip" and len(argv) > 2:
        password = argv[3] if len(argv) > 3 else None
        return print_outcome(decoder.decode_offline_zip(argv[2], password))

    from idqr.scan.qr_reader import decode_image_file

    print(f"Testing QR decoding on: {argv[1]}")
    try:
        outcome = decode_image_file(argv[1], decoder)
    except FileNotFoundError as e:
        print(f"❌ {e}")
        return 1
    return print_outcome(outcome)


if __name__ == "__main__":
    sys.exit(main(sys.argv))
