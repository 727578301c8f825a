import sys
import logging
from pathlib import Path

LOG_LINE_FORMAT = '%(asctime)s: %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class AppendFileHandler(logging.Handler):
    """
    A logging handler that appends one line per record to a plain text file.

    The file is opened in append mode for every record and closed again
    straight away, so nothing is held open between events. Any failure to
    write is reported on stderr and otherwise discarded; logging never
    stops the supervisor.
    """
    def __init__(self, file_path: Path):
        """
        Initializes the append handler.

        :param file_path: The log file to append to. It does not need to exist yet.
        """
        super().__init__()
        self.file_path = Path(file_path)
        self.setFormatter(logging.Formatter(LOG_LINE_FORMAT, datefmt=LOG_DATE_FORMAT))

    def emit(self, record: logging.LogRecord) -> None:
        """
        Formats a log record and appends it to the log file.

        :param record: The log record to be written.
        """
        try:
            line = self.format(record)
            with self.file_path.open('a', encoding='utf-8') as f:
                f.write(line + '\n')
        except Exception as e:
            print(f"ERROR: Could not write to log file '{self.file_path}': {e}", file=sys.stderr)
