from hanzi_backend.manager import run

run()
