from changekit_cli import main

main()
