from lookahead2048.cli import main

main()
