from roller.cli.app import main

main()
