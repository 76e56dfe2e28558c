"""Shared constants and defaults."""

APP_NAME = "birdrec"

DEFAULT_SAMPLE_RATE = 16000
DEFAULT_CHANNELS = 1

# Fixed capture profile
AUDIO_SOURCE = "microphone"
CONTAINER_FORMAT = "wav"
AUDIO_CODEC = "pcm_s16le"
SAMPLE_WIDTH = 2  # bytes, 16-bit PCM

TEMP_FILE_PREFIX = "temp_audio"
TEMP_FILE_SUFFIX = ".wav"

MICROPHONE = "microphone"
VALID_PERMISSION_MODES = ("ask", "allow", "deny", "device")
DEFAULT_PERMISSION_MODE = "ask"

BLOCKING_MESSAGE = "Please grant the required permissions to use this app."

# (name, decibel range) in rotation order. Song Sparrow is listed twice.
BIRDS = (
    ("Song Sparrow", "55.7 dB"),
    ("Northern Mockingbird", "71.8 dB"),
    ("American Robin", "52.8 dB"),
    ("Song Sparrow", "55.7 dB"),
    ("Northern Cardinal", "33.2 dB"),
    ("Bewick's Wren", "90.5 dB"),
)

BIRD_IMAGES = {
    "Song Sparrow": "so_spar.png",
    "Northern Mockingbird": "no_mock.png",
    "American Robin": "am_robi.png",
    "Northern Cardinal": "no_card.png",
    "Bewick's Wren": "be_wren.png",
}
