from hf.cli.app import main

main()
