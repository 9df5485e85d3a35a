from brandagent.main import run

run()
