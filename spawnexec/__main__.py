from spawnexec.cli import main

main()
