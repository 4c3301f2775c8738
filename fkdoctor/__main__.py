from fkdoctor.cli import main

main()
