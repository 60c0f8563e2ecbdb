from deebo_doctor.cli.app import main

main()
