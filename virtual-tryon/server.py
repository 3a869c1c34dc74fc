"""
Flask Server for Virtual Try-On
Serves the composited camera stream and a small JSON control API
"""

from flask import Flask, Response, render_template_string, jsonify
from flask_cors import CORS
import cv2
import threading
import time
import sys

import config
from tryon_engine import TryOnEngine

app = Flask(__name__)
CORS(app)  # Enable CORS for frontend access

# Global variables
camera = None
camera_lock = threading.Lock()
engine_lock = threading.Lock()  # pose callback is not reentrant
is_running = False
tryon_engine = None

# Configuration
CAM_INDEX = int(sys.argv[1]) if len(sys.argv) > 1 else 0


def init_camera():
    """Initialize camera"""
    global camera
    with camera_lock:
        if camera is None or not camera.isOpened():
            camera = cv2.VideoCapture(CAM_INDEX)
            camera.set(cv2.CAP_PROP_FRAME_WIDTH, config.FRAME_WIDTH)
            camera.set(cv2.CAP_PROP_FRAME_HEIGHT, config.FRAME_HEIGHT)
            camera.set(cv2.CAP_PROP_FPS, 30)

            if camera.isOpened():
                print(f"[OK] Camera {CAM_INDEX} initialized")
                return True
            else:
                print(f"[ERROR] Failed to open camera {CAM_INDEX}")
                return False
    return True


def release_camera():
    """Release camera resources"""
    global camera
    with camera_lock:
        if camera is not None:
            camera.release()
            camera = None
            print("[INFO] Camera released")


def generate_frames():
    """Generate video frames with the garment overlay"""
    global is_running

    is_running = True

    if not init_camera():
        is_running = False
        return

    while is_running:
        with camera_lock:
            if camera is None or not camera.isOpened():
                break

            ret, frame = camera.read()

        if not ret:
            time.sleep(0.1)
            continue

        if config.FLIP_HORIZONTAL:
            frame = cv2.flip(frame, 1)

        if tryon_engine is not None:
            with engine_lock:
                frame, _ = tryon_engine.process_frame(frame)

        ret, buffer = cv2.imencode('.jpg', frame, [cv2.IMWRITE_JPEG_QUALITY, 85])
        if not ret:
            continue

        yield (b'--frame\r\n'
               b'Content-Type: image/jpeg\r\n\r\n' + buffer.tobytes() + b'\r\n')

    is_running = False


@app.route('/')
def index():
    """Simple test page"""
    return render_template_string('''
    <!DOCTYPE html>
    <html>
    <head>
        <title>Virtual Try-On</title>
        <style>
            body {
                font-family: Arial, sans-serif;
                background: #000;
                color: white;
                display: flex;
                flex-direction: column;
                align-items: center;
                padding: 20px;
            }
            .video-container { border-radius: 12px; overflow: hidden; margin: 20px 0; }
            img { display: block; }
            button {
                background: #007AFF; color: #fff; border: none;
                padding: 12px 24px; border-radius: 25px; font-weight: bold;
            }
        </style>
    </head>
    <body>
        <div class="video-container">
            <img src="/tryon_feed" width="{{ width }}" height="{{ height }}" alt="Video Feed">
        </div>
        <button onclick="next()">NEXT <span id="counter"></span></button>
        <script>
            async function refresh() {
                const data = await (await fetch('/api/tryon/status')).json();
                document.getElementById('counter').textContent = (data.index + 1) + '/' + data.count;
            }
            async function next() {
                await fetch('/api/tryon/next');
                refresh();
            }
            setInterval(() => refresh().catch(() => {}), 500);
        </script>
    </body>
    </html>
    ''', width=config.DISPLAY_WIDTH, height=config.DISPLAY_HEIGHT)


@app.route('/tryon_feed')
def tryon_feed():
    """Try-on video streaming route"""
    return Response(
        generate_frames(),
        mimetype='multipart/x-mixed-replace; boundary=frame'
    )


@app.route('/api/tryon/status')
def get_tryon_status():
    """Current garment, cursor and overlay rectangle"""
    if tryon_engine is None:
        return jsonify({'status': 'error', 'message': 'Engine not loaded'}), 503
    return jsonify(tryon_engine.session.status())


@app.route('/api/tryon/next')
def tryon_next():
    if tryon_engine is None:
        return jsonify({'status': 'error', 'message': 'Engine not loaded'}), 503
    index = tryon_engine.next_garment()
    return jsonify({'status': 'ok', 'index': index, 'count': tryon_engine.catalog.count})


@app.route('/api/tryon/prev')
def tryon_prev():
    if tryon_engine is None:
        return jsonify({'status': 'error', 'message': 'Engine not loaded'}), 503
    index = tryon_engine.prev_garment()
    return jsonify({'status': 'ok', 'index': index, 'count': tryon_engine.catalog.count})


@app.route('/api/tryon/list')
def tryon_list():
    """Get list of all available garments"""
    if tryon_engine is not None:
        return jsonify({'items': tryon_engine.get_clothing_list(), 'count': tryon_engine.catalog.count})
    return jsonify({'items': [], 'count': 0})


@app.route('/api/status')
def get_status():
    return jsonify({
        'running': is_running,
        'camera_index': CAM_INDEX,
        'engine_loaded': tryon_engine is not None,
    })


@app.route('/api/start')
def start_stream():
    """Start the video stream"""
    global is_running
    if not is_running:
        is_running = True
        return jsonify({'status': 'started'})
    return jsonify({'status': 'already running'})


@app.route('/api/stop')
def stop_stream():
    """Stop the video stream"""
    global is_running
    is_running = False
    release_camera()
    return jsonify({'status': 'stopped'})


def main():
    global tryon_engine

    print("=" * 50)
    print("Virtual Try-On Server")
    print("=" * 50)

    print("\n[INFO] Loading try-on engine...")
    tryon_engine = TryOnEngine().start()

    print(f"\n[INFO] Starting server on http://localhost:5000")
    print("[INFO] Press Ctrl+C to stop\n")

    try:
        app.run(host='0.0.0.0', port=5000, debug=False, threaded=True)
    finally:
        tryon_engine.close()


if __name__ == '__main__':
    main()
