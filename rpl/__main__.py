from rpl.cli.app import main

main()
