from randpath.cli import main

main()
