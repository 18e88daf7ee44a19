from buildver.cli.app import main

main()
