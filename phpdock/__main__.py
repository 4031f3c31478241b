from phpdock.cli import main

main()
