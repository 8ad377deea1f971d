from disk_pressure.runtime.entrypoint import run

run()
