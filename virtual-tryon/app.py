"""
Virtual Try-On desktop preview.
Run: python app.py [camera_index]
Controls: [D]/[N] next garment | [A] previous garment | [Q]/[ESC] exit
"""

import sys

import cv2

import config
from tryon_engine import TryOnEngine

# Camera index can be overridden with command-line argument: python app.py <camera_index>
CAM_INDEX = int(sys.argv[1]) if len(sys.argv) > 1 else 0
WINDOW_NAME = "Virtual Try-On"


def main():
    engine = TryOnEngine()

    cap = cv2.VideoCapture(CAM_INDEX)
    cap.set(cv2.CAP_PROP_FRAME_WIDTH, config.FRAME_WIDTH)
    cap.set(cv2.CAP_PROP_FRAME_HEIGHT, config.FRAME_HEIGHT)
    if not cap.isOpened():
        engine.close()
        raise RuntimeError(f"[ERROR] Failed to open camera {CAM_INDEX}")

    engine.start()
    print("[OK] Running... Controls: [A] prev | [D]/[N] next | [Q]/[ESC] exit")

    try:
        while True:
            ret, frame = cap.read()
            if not ret:
                print("[ERROR] Failed to read frame")
                break

            if config.FLIP_HORIZONTAL:
                frame = cv2.flip(frame, 1)

            out, _ = engine.process_frame(frame)
            cv2.imshow(WINDOW_NAME, out)

            key = cv2.waitKey(1) & 0xFF
            if key in [ord('q'), ord('Q'), 27]:
                break
            elif key in [ord('d'), ord('D'), ord('n'), ord('N')]:
                engine.next_garment()
            elif key in [ord('a'), ord('A')]:
                engine.prev_garment()
    finally:
        cap.release()
        engine.close()
        cv2.destroyAllWindows()


if __name__ == "__main__":
    main()
