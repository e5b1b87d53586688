from inscription.cli import main

main()
