import os
import sys
import warnings
from argparse import ArgumentParser

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


from frakview import RENDER_MODES, ConfigError, load_parameters, render_frame
from frakview.display import show_raster, window_title


def select_device():
    """Pick the first visible GPU for the tensor mode, falling back to the CPU."""

    import tensorflow as tf

    if _suppress_messages:
        tf.get_logger().setLevel("ERROR")

    log("TensorFlow version: %s" % tf.__version__)

    gpus = tf.config.list_physical_devices('GPU')
    if not gpus:
        log("No GPU found, using CPU")
        return '/CPU:0'
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
    except RuntimeError as e:
        log(e)
        return '/CPU:0'
    log("GPU found, using %s" % gpus[0].name)
    return '/GPU:0'


def build_parser():
    parser = ArgumentParser(description='Render a Mandelbrot or Julia set and show it in a window.')

    parser.add_argument('config', nargs='?', default=None,
                        help='INI file overriding the default parameters', metavar='CONFIG')

    parser.add_argument('--mode', choices=RENDER_MODES, default='sequential',
                        help='how pixels are evaluated: in-process rows, a process pool, or TensorFlow')

    parser.add_argument('--workers', type=int, dest='workers', default=None,
                        help='number of worker processes for --mode parallel (default: CPU count)',
                        metavar='WORKERS')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    global VERBOSE
    VERBOSE = VERBOSE or bool(opt.verbose)

    if opt.workers is not None and opt.workers < 1:
        parser.error('--workers must be at least 1.')

    try:
        params = load_parameters(opt.config)
    except ConfigError as exc:
        print("Error reading %s" % opt.config)
        log(exc)
        return 1

    log("Rendering %s set, %dx%d, %d iterations" % (
        params.kind.value, params.width, params.height, params.max_iterations))

    device = select_device() if opt.mode == 'tensor' else None
    raster = render_frame(params, mode=opt.mode, workers=opt.workers, device=device)

    log("Render complete")
    show_raster(raster, window_title(opt.config))
    return 0


if __name__ == '__main__':
    sys.exit(main())
