# synchive-monitor

Keeps a CRC32 listing of every file below a directory up to date while the
directory changes. The listing is written to `~listOfFilesInCRC.txt` at the
root of the watched directory. A later mirroring run can then read checksums
from it and does not need to hash unchanged files again.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Usage

Start the interactive terminal:

```
synchive-monitor
```

It understands these commands. Command words are matched without regard to
case. The path is used as typed.

| Command           | Effect                                                          |
|-------------------|-----------------------------------------------------------------|
| `new <path>`      | Store `<path>` in the locations file and start watching it      |
| `once <path>`     | Watch `<path>` without storing it                               |
| `list`            | Show the stored locations                                       |
| `remove <path>`   | Remove `<path>` from the locations file                         |
| `removeall`       | Empty the locations file                                        |
| `help`, `/?`      | Show the list of commands                                       |
| `q`               | Quit                                                            |

`new` and `once` report `Bad Path` when the path is not a directory. They report
`Path already monitored` when the path is already stored. Paths are compared
without regard to case. Monitors started from the terminal run in the same
process and stop when you leave the terminal. `remove` and `removeall` change
only the stored list and do not stop a monitor that is already running.

Watch a single directory in the foreground until interrupted:

```
synchive-monitor -monitor <path>
```

Watch every stored location in this process until interrupted:

```
synchive-monitor -startAll
```

The stored locations are kept in `SynchiveMonitor_Locations.ini`, one path per
line. The file lives in a `Synchive` directory under `%APPDATA%`. Where that
variable is not set, it goes under `$XDG_CONFIG_HOME`, or under `~/.config`.
`synchive_monitor.settings.storage_path()` returns this directory.

## How the listing is kept

When a directory is first watched, it is read from the top down. A directory
that holds a `~listOfFilesInCRC.txt` is taken from that file. Every other
directory has its files hashed.

After that, the watcher queues every created, changed or renamed file and
directory. A deleted file is dropped from the listing. A deleted directory is
dropped together with everything below it. A rename moves the stored checksums
to the new name.

Once a minute the queue is worked off. Queued directories that are not yet in
the listing are expanded into their contents, and files are hashed. The listing
is rewritten if anything changed. If a file cannot be read yet, the queue keeps
it and the next pass tries it again.

In the listing, each directory appears as a line `~<depth>: <relative path>`.
It is followed by one line per file, `<CRC32> "<file name>"`. The CRC32 is
written as eight upper-case hexadecimal digits. The first line of the file is a
header that names the version and the root.

## Using it from Python

```python
from synchive_monitor.crc32 import CRC32
from synchive_monitor.monitor import DirectoryMonitor

print(CRC32().compute_hash("archive.bin"))  # None if the file does not exist

monitor = DirectoryMonitor("/data/photos", 60)
monitor.run()
```

Other parts you can use directly:

- `CRC32.compute_hash()` raises `FileInUseError` when the file exists but
  cannot be read.
- `DirectoryMonitor.start()` and `stop()` control watching.
- `DirectoryMonitor.tick()` works off the queue and writes the listing once.
- `DirectoryManagement` in `synchive_monitor.management` holds the listing. It
  takes change notifications through `file_created`, `file_deleted` and
  `file_renamed`, and offers `process_queue` and `write_to_file`.
- `synchive_monitor.processor` has helpers that build and parse the ID lines:
  `directory_unique_id`, `file_unique_id`, `parse_directory_id` and
  `parse_file_id`.

Progress messages go through the standard `logging` module.

## What it does not do

- It does not register itself with the operating system to start at logon.
  Run `synchive-monitor -startAll` from your own login or service setup.
- It does not start a separate process for each location. All monitors run as
  threads of the one process that started them.