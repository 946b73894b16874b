OPTIONS_LIMIT: int = 20
MIN_LENGTH: int = 1
WAIT_MS: int = 0
LATINIZE: bool = True
SINGLE_WORDS: bool = True
WORD_DELIMITERS: str = " "
PHRASE_DELIMITERS: str = "'\""
CANCEL_ON_FOCUS_LOST: bool = False

# Top-K used by the CLI and web API when no explicit k is given
TOP_K: int = 10

# Option files picked up by loader.load_options() when walking directories
INCLUDE_EXTS = (".txt", ".json", ".jsonl")
ENCODING: str = "utf-8"

# set TYPEAHEAD_VERBOSE=1 to get INFO logging from the loader/engine
VERBOSE_ENV: str = "TYPEAHEAD_VERBOSE"
