"""
AirScope - Hand-Gesture Explorer for 3D Models

Entry point for the application.
"""
import argparse
import sys
import time
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent / "src"))


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="AirScope - Hand-Gesture 3D Explorer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--input",
        choices=["webcam", "mock"],
        default=None,
        help="Landmark source (overrides config, default: webcam)",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--frames",
        type=int,
        default=0,
        help="Stop after this many frames (0 = run until quit)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode with landmark overlay",
    )

    return parser.parse_args()


def _describe(intent):
    fields = ", ".join(f"{k}={v:.3f}" if isinstance(v, float) else f"{k}={v}"
                       for k, v in vars(intent).items())
    return f"{type(intent).__name__}({fields})"


def run_debug(config, max_frames=0):
    """
    Run the pipeline in a cv2 window - landmarks, gesture, mode and pan.
    Useful for tuning thresholds from viewing distance.
    """
    import logging
    import cv2
    from interaction import ExplorerSession, IntentDispatcher
    from interaction.worker import create_source

    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    source = create_source(config)
    dispatcher = IntentDispatcher(
        on_explode=lambda: print("Action: Explode"),
        on_implode=lambda: print("Action: Implode"),
        on_raycast=lambda x, y: print(f"Action: Raycast at ({x:.2f}, {y:.2f})"),
        on_reset_focus=lambda: print("Action: Reset focus"),
        on_focus=lambda part: print(f"Action: Focus {part}"),
    )
    session = ExplorerSession(config, dispatcher)

    print("Starting debug mode...")
    print("Press 'q' to quit, 'r' to reset")
    print("-" * 40)

    if not source.start():
        print("ERROR: Could not open camera")
        return 1

    if config.input.mode == "mock":
        frame_interval = 1.0 / max(1, config.input.mock_fps)
    else:
        frame_interval = 0.0

    last_gesture = None
    try:
        while True:
            landmarks = source.get_landmarks()
            result = session.tick(landmarks, time.perf_counter())
            hand, output = result.hand, result.output

            if hand.gesture != last_gesture:
                print(f"[{source.frame_count:5d}] {hand.gesture.name} ({output.mode.name})")
                last_gesture = hand.gesture

            frame = source.get_frame_with_landmarks(
                hand.landmarks if hand.tracked else None,
                black_background=config.input.mode == "mock",
            )

            if frame is not None:
                cv2.putText(
                    frame, f"Gesture: {hand.gesture.name}", (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 1, (0, 255, 0), 2
                )

                info_lines = [
                    f"Mode: {output.mode.name}",
                    f"Raw: {hand.raw_gesture.name}  alpha: {hand.alpha:.2f}",
                    f"Cursor: ({output.cursor[0]:.2f}, {output.cursor[1]:.2f})",
                    f"Yaw/Pitch: {session.hsm.global_motion.yaw:+.4f} {session.hsm.global_motion.pitch:+.4f}",
                ]
                if output.pan is not None:
                    info_lines.append(
                        f"Pan: ({output.pan.x:+.2f}, {output.pan.y:+.2f}) x{output.pan.intensity:.2f}"
                    )
                if hand.features is not None:
                    info_lines.append(
                        f"Pinch ratio: {hand.features.pinch_ratio:.3f}  "
                        f"Ext: {hand.features.extended_fingers}  Curl: {hand.features.curled_fingers}"
                    )
                for i, line in enumerate(info_lines):
                    cv2.putText(
                        frame, line, (10, 60 + i * 25),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.6, (255, 255, 255), 1
                    )

                cv2.imshow("AirScope Debug", frame)

            key = cv2.waitKey(max(1, int(frame_interval * 1000))) & 0xFF
            if key == ord('q'):
                break
            if key == ord('r'):
                session.reset()
                print("Session reset")

            if max_frames and source.frame_count >= max_frames:
                break

    finally:
        source.stop()
        cv2.destroyAllWindows()

    return 0


def run_headless(config, max_frames=0):
    """Run AirScope with the tracking worker on a QThread, printing intents."""
    import signal
    import atexit
    from PyQt5.QtCore import QCoreApplication, QThread, Qt
    from interaction.worker import ExplorerWorker

    app = QCoreApplication(sys.argv)

    # Setup background worker and thread
    thread = QThread()
    worker = ExplorerWorker(config)
    worker.moveToThread(thread)

    frames_seen = [0]  # Use list for mutability in closure

    def cleanup():
        """Ensure the landmark source is released on exit."""
        print("\nCleaning up tracking resources...")
        worker.stop_process()
        thread.quit()
        thread.wait(2000)
        print("Cleanup complete.")

    atexit.register(cleanup)

    def signal_handler(signum, frame):
        """Handle Ctrl+C and kill signals gracefully."""
        print(f"\nReceived signal {signum}, shutting down...")
        app.quit()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    def handle_frame(frame):
        frames_seen[0] += 1
        if max_frames and frames_seen[0] >= max_frames:
            app.quit()

    def handle_error(msg):
        print(f"WORKER ERROR: {msg}")
        app.quit()

    # Connect signals (Use QueuedConnection so handlers run in the main thread)
    thread.started.connect(worker.start_process)
    worker.frame_processed.connect(handle_frame, Qt.QueuedConnection)
    worker.intent.connect(lambda i: print(f"Action: {_describe(i)}"), Qt.QueuedConnection)
    worker.mode_changed.connect(lambda m: print(f"Mode: {m}"), Qt.QueuedConnection)
    worker.hand_lost.connect(lambda: print("Hand lost"), Qt.QueuedConnection)
    worker.error.connect(handle_error, Qt.QueuedConnection)

    # Start thread
    thread.start()

    try:
        result = app.exec_()
    finally:
        cleanup()
        atexit.unregister(cleanup)  # Avoid double cleanup

    return result


def main():
    """Main entry point."""
    args = parse_args()

    # Load config
    from sensing import load_config
    config = load_config(args.config)

    # Apply CLI overrides
    if args.input:
        config.input.mode = args.input
    if args.debug:
        config.ui.debug_overlay = True

    print("AirScope starting...")
    print(f"  Input mode: {config.input.mode}")
    print(f"  Debug: {args.debug}")
    print()

    if args.debug:
        return run_debug(config, args.frames)
    return run_headless(config, args.frames)


if __name__ == "__main__":
    sys.exit(main())
