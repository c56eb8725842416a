import os
import subprocess
import sys

repo = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
env = os.environ.copy()
env["PYTHONPATH"] = repo + os.pathsep + env.get("PYTHONPATH", "")
# Output lands in the caller's working directory, so do not chdir into the repo.
sys.exit(subprocess.call([sys.executable, "-m", "assetnorm.cli", "unitize", *sys.argv[1:]], env=env))
